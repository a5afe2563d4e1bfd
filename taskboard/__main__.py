import logging

import uvicorn

from .main import app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = app.state.settings
    logger.info(f"Server is running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
