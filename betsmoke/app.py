from datetime import datetime, timezone

from flask import Flask

from .app_utils import make_ok
from .config import setup_logger
from .routes.account_api import bp as account_api_bp
from .routes.competitions_api import bp as competitions_api_bp
from .routes.notes_api import bp as notes_api_bp

app = Flask(__name__)

logger = setup_logger(__name__)

for _bp in (competitions_api_bp, account_api_bp, notes_api_bp):
    app.register_blueprint(_bp)
logger.info("routes_registered blueprints=%s", ",".join(sorted(app.blueprints)))


@app.route("/health", methods=["GET"])
def health():
    return make_ok(
        {"ok": True, "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")},
        message="OK",
    )


if __name__ == "__main__":  # pragma: no cover
    app.run(debug=False)
