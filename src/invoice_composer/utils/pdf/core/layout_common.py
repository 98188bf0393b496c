"""
Layout and style constants for page rendering (millimetres, A4 portrait).
"""

# Page geometry
PAGE_H = 297
BASE_MARGIN = 10
BASE_MARGIN_TOP = 20
HEADER_MARGIN_TOP = 5
FOOTER_Y = PAGE_H - 10 - HEADER_MARGIN_TOP
CELL_MARGIN = 1

# Content band: body content must end above this line.
MAX_PAGE_HEIGHT = 260

# Font sizes (points)
LARGE_TEXT_FONT_SIZE = 10
BASE_TEXT_FONT_SIZE = 8
SMALL_TEXT_FONT_SIZE = 7

# Title / metadata panel (right half)
PANEL_X = 120
PANEL_W = 80

# Contact blocks
CONTACT_Y = BASE_MARGIN_TOP + 28
COMPANY_X = 10
CUSTOMER_X = 120
CONTACT_W = 80
CONTACT_GAP = 5
LOGO_W, LOGO_H = 20, 30
CONTACT_NAME_HEIGHT = 10
CONTACT_PHONE_HEIGHT = 5
CONTACT_LINE_HEIGHT = 5
CONTACT_ADDRESS_PADDING = 2
CONTACT_INFO_LINE_HEIGHT = 3
CONTACT_INFO_PADDING = 2

# Items table
TABLE_X = 10
TABLE_W = 190
TABLE_HEADER_HEIGHT = 6
TABLE_GAP = 5
ITEM_LINE_HEIGHT = 4
ITEM_DESCRIPTION_LINE_HEIGHT = 3
ITEM_ROW_PADDING = 2
ITEM_COL_NAME_OFFSET = 10
ITEM_COL_UNIT_PRICE_OFFSET = 80
ITEM_COL_QUANTITY_OFFSET = 103
ITEM_COL_TOTAL_HT_OFFSET = 113
ITEM_COL_DISCOUNT_OFFSET = 140
ITEM_COL_TAX_OFFSET = 157
ITEM_COL_TOTAL_TTC_OFFSET = 175

# Totals block (right half)
TOTALS_LABEL_X = 120
TOTALS_VALUE_X = 160
TOTALS_COL_W = 40
TOTALS_ROW_HEIGHT = 10
TOTALS_DISCOUNT_ROW_HEIGHT = 15
TOTALS_BLOCK_HEIGHT = 3 * TOTALS_ROW_HEIGHT
PAYMENT_TERM_GAP = 5
PAYMENT_TERM_HEIGHT = 5

# Barcode + notes (left half)
BARCODE_X = 10
BARCODE_IMAGE_HEIGHT = 20
BARCODE_CAPTION_GAP = 1
BARCODE_CAPTION_HEIGHT = 4
BARCODE_BLOCK_HEIGHT = BARCODE_IMAGE_HEIGHT + BARCODE_CAPTION_GAP + BARCODE_CAPTION_HEIGHT + 3
BARCODE_PIXEL_SIZE = (300, 80)
BARCODE_JPEG_QUALITY = 90
NOTES_X = 10
NOTES_W = 100
NOTES_FONT_SIZE = 12
