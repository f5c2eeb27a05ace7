"""Run the htcode gateway: python -m htcode"""

import uvicorn

from htcode.app import configure_logging
from htcode.config import load_config

config = load_config()
configure_logging(config.log_level)
uvicorn.run("htcode.app:create_app", host=config.host, port=config.port, factory=True)
