"""GourmetNet Recipe Service.

Single entry point for the HTTP API:
- Builds the recipe pipeline (Gemini when GEMINI_API_KEY is set, fallback otherwise)
- Enables the Spoonacular search proxy when USE_SPOONACULAR=true
- Serves the REST API with uvicorn

Run with: python app.py
"""

import uvicorn

from gourmetnet.api.app import create_app
from gourmetnet.utils.config import config
from gourmetnet.utils.logger import logger


logger.info("Configuring recipe service...")
if not config.gemini_configured:
    logger.warning("GEMINI_API_KEY is not set: every recipe will come from the fallback generator")
if config.spoonacular_configured:
    logger.info("Spoonacular search enabled")

app = create_app(config)

logger.info("Recipe service configured successfully")


if __name__ == "__main__":
    logger.info(f"Starting GourmetNet Recipe Service on {config.HOST}:{config.PORT}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
