ENV_FILE = ".env"

DEFAULT_BUCKET = "resources"
DEFAULT_MATERIAL_ROOT = "academic"
DEFAULT_PER_PAGE = 8
DEFAULT_STORAGE_TIMEOUT = 10.0
DEFAULT_STORAGE_RETRIES = 3
# 10MB matches the resources bucket file size limit
DEFAULT_MAX_UPLOAD_MB = 10
