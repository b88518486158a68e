from __future__ import annotations

from utils_api import load_config
from utils_api.application import create_application, resolve_config_path
from utils_api.logging_config import configure_logging

config = load_config(resolve_config_path())
configure_logging(config.server.log_level)

app = create_application(config)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=True)
