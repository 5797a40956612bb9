import config
from quart import Quart
from dotenv import load_dotenv

load_dotenv(override=True)

from routers import api_blueprint
from database import initialize_database
from utils import not_found_response
from utils.logging_config import setup_logging, get_logger


def create_app():
    """Create and configure the Quart application."""
    # Initialize logging first
    setup_logging(level=config.LOG_LEVEL, log_file=config.LOG_FILE)
    logger = get_logger('App')
    logger.info(f"Initializing {config.APP_NAME} application...")

    app = Quart(__name__)

    # Ensure the cache database file and tables exist.
    initialize_database(config.CACHE_DATABASE_PATH)

    app.register_blueprint(api_blueprint, url_prefix='/api')

    @app.errorhandler(404)
    async def handle_not_found(error):
        return not_found_response("Unknown endpoint")

    return app


if __name__ == '__main__':
    import uvicorn
    app = create_app()
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")
