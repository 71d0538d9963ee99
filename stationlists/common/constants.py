"""Application constants."""

from pathlib import Path
from types import MappingProxyType

USER_AGENT = "stationlists/0.3 (+reference data refresh)"
STAGES = (
    "fetch",
    "parse",
    "probe",
    "export",
)
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

# Product ids: IDD NT, IDN NSW/ACT, IDQ Qld, IDS SA, IDT Tas/Antarctica, IDV Vic, IDW WA.
STATE_CODES = MappingProxyType(
    {
        "WA": "W",
        "QLD": "Q",
        "VIC": "V",
        "NT": "D",
        "TAS": "T",
        "ANT": "T",
        "NSW": "N",
        "SA": "S",
    }
)
ANTARCTIC_STATE = "ANT"
PRODUCT_CODES = MappingProxyType(
    {
        "standard": "60801",
        "antarctic": "60803",
    }
)
FEED_URL_PREFIX = "http://www.bom.gov.au/fwo"

PACKAGE_EXTDATA_DIR = Path(__file__).resolve().parents[1] / "extdata"

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "attempt",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
