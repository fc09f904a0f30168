import os

DATA_DIR = os.getenv("LVFS_DATA_DIR") or os.getenv("OPENSHIFT_DATA_DIR", "data")
UPLOAD_DIR = os.path.join(DATA_DIR, "uploads")
DB_PATH = os.getenv("LVFS_DB_PATH", os.path.join(DATA_DIR, "lvfs.db"))

# where the upload handler redirects to
RESULT_PAGE = os.getenv("LVFS_RESULT_PAGE", "result.php")

# Upload checks
MIN_UPLOAD_BYTES = 1280
MAX_UPLOAD_BYTES = 50_000_000
MULTIPART_OVERHEAD = 1 << 20  # form fields + boundaries
CAB_MAGIC = b"MSCF"
METAINFO_MARKER = b".metainfo.xml"
DEFAULT_FILENAME = "firmware.cab"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
