import logging
from enum import Enum

# Modem doesn't care but pretend to be the browser that normally polls the status page
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64; rv:123.4) Gecko/20100101 Firefox/123.4",
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.5",
    "X-Requested-With": "XMLHttpRequest",
    "Connection": "keep-alive",
    "Pragma": "no-cache",
    "Cache-Control": "no-cache",
}

# Both status pages come from the same CGI script; only the `page` query param differs
CGI_PATH = "/index.cgi"
MODEM_PAGE = "modemStatusData"
TRIA_PAGE = "triaStatusData"

# Every status page is one long line of fields separated by this
FIELD_DELIMITER = "##"

# Field counts as of firmware UT_3.7.8.9.5. Check these after every firmware update!
FIELD_COUNT_MODEM = 81
FIELD_COUNT_TRIA = 84


class LogLevel(Enum):
    """Simple enum of supported log levels for easy validation"""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL
