# app.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

from user_portal import create_app


app = create_app(os.getenv("USER_PORTAL_CONFIG", "config.Config"))

logging.basicConfig(
    level=app.config["LOG_LEVEL"],
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


if __name__ == '__main__':
    logger.info("Using users API at %s", app.config["API_BASE_URL"])
    app.run(debug=app.config.get("DEBUG", False))
