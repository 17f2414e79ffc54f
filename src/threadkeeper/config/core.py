import logging
import os

logger = logging.getLogger(__name__)


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("threadkeeper", {})
        discord_cfg = cfg.get("discord", {})

        self.TOKEN_ENV: str = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))
        self.DISCORD_API_TOKEN: str | None = os.getenv(self.TOKEN_ENV)
        self.LOG_LEVEL: str = str(cfg.get("log_level", os.getenv("LOG_LEVEL", "INFO"))).upper()

        if not self.DISCORD_API_TOKEN:
            logger.debug("%s is not set; API calls will need an explicit token.", self.TOKEN_ENV)
