"""BetSmoke competition views over the SportsMonks proxy."""
import logging
import os

__version__ = "0.1.0"

if not logging.getLogger().handlers:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

# request/connection chatter from the proxy client
for _noisy in ("urllib3", "requests", "werkzeug"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
