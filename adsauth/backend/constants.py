APP_NAME = "ads.txt Authorization Records"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ALLOW_ORIGINS = [
	"http://localhost",
	"http://127.0.0.1",
	"http://localhost:3000",
]
DEFAULT_TRUSTED_HOSTS = [
	"127.0.0.1",
	"localhost",
	"testserver",
]
DEFAULT_POLICY = "fail_fast"
DEFAULT_MAX_DOCUMENT_BYTES = 2 * 1024 * 1024
MIN_MAX_DOCUMENT_BYTES = 1024
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
