import logging
import sys

from festival.config.config import Config
from festival.errors import StorageError
from festival.services.database import close_mongoDB

logger = logging.getLogger("festival")


def main():
    from festival import create_app

    try:
        app = create_app()
    except (StorageError, RuntimeError) as exc:
        logger.critical(f"❌ Refusing to start: {exc}")
        sys.exit(1)

    try:
        app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.FLASK_DEBUG)
    finally:
        close_mongoDB()


if __name__ == "__main__":
    main()
