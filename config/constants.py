"""
Centralized constants for Card Insight Export.
Fixed values shared by the clients, the export pipeline and logging.
"""

# ===========================================
# REMOTE SERVICE
# ===========================================
DEFAULT_API_BASE_URL = "https://business-card-analyzer-backend.onrender.com"
ANALYSIS_ENDPOINT = "/upload"             # image analysis
UPLOAD_ENDPOINT = "/upload-image"         # artifact storage
REQUEST_TIMEOUT_SECONDS = 60.0
UPLOAD_FIELD_NAME = "file"

# ===========================================
# ANALYSIS MESSAGES
# ===========================================
NO_RESULT_MESSAGE = "Analysis completed but could not retrieve results."
NO_DETAILS_MESSAGE = "No details available"
ERROR_MESSAGE_TEMPLATE = "Error occurred: {error}\n\nDetails:\n{details}"
COMMUNICATION_ERROR_TEMPLATE = "Communication error: {reason}"

# ===========================================
# CAPTURE
# ===========================================
CAPTURE_BACKGROUND_COLOR = "#1f2937"
CAPTURE_SCALE = 2.0
CAPTURE_VIEWPORT_WIDTH = 800
CAPTURE_VIEWPORT_HEIGHT = 600
CAPTURE_REGION_ID = "analysis-result"
CAPTURE_REGION_SELECTOR = f"#{CAPTURE_REGION_ID}"
LINK_SELECTOR = "a[href]"

# ===========================================
# ARTIFACTS
# ===========================================
IMAGE_FILENAME = "result.png"
DOCUMENT_FILENAME = "result.pdf"
IMAGE_CONTENT_TYPE = "image/png"
DOCUMENT_CONTENT_TYPE = "application/pdf"
DEFAULT_PAGE_SIZE = "A4"

# ===========================================
# QR CODE
# ===========================================
QR_WIDTH = 1024                       # px, square
QR_MARGIN = 4                         # quiet zone, in modules
QR_DARK_COLOR = "#000000"
QR_LIGHT_COLOR = "#FFFFFF"
QR_ERROR_CORRECTION = "M"

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/cardlens.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
