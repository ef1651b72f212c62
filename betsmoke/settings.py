import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _read_secret_file(path: str | None) -> str | None:
    if not path:
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return None


# --- BetSmoke proxy backend ---
BETSMOKE_API_URL = os.getenv("BETSMOKE_API_URL", "http://localhost:3001").rstrip("/")
BETSMOKE_TIMEOUT_MS = _get_int("BETSMOKE_TIMEOUT_MS", 7000)
BETSMOKE_MAX_RETRIES = max(1, _get_int("BETSMOKE_MAX_RETRIES", 1))  # 1 = single attempt
BETSMOKE_TOKEN = os.getenv("BETSMOKE_TOKEN") or _read_secret_file(os.getenv("BETSMOKE_TOKEN_FILE"))

# --- Session persistence ---
BETSMOKE_SESSION_FILE = os.path.expanduser(
    os.getenv("BETSMOKE_SESSION_FILE", "~/.betsmoke/session.json")
)
VALIDATE_SESSION_ON_INIT = _get_bool("VALIDATE_SESSION_ON_INIT", True)

# --- Selection heuristics ---
PRIMARY_LEAGUE_ID = _get_int("PRIMARY_LEAGUE_ID", 8)
