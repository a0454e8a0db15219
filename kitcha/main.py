import logging

import uvicorn

from kitcha.api.api_run import app
from kitcha.utilities.config import APP_HOST, APP_PORT, DEBUG, LOG_LEVEL


def main():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("kitcha_app").info("Kitcha API on http://%s:%s (debug=%s)", APP_HOST, APP_PORT, DEBUG)
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
