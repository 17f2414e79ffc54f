import os

_DEFAULT_API_BASE = "https://discord.com/api/v10"


class Rest:
    def __init__(self, config: dict | None = None) -> None:
        rest_cfg = (config or {}).get("threadkeeper", {}).get("rest", {})
        self.API_BASE: str = str(rest_cfg.get("api_base", os.getenv("DISCORD_API_BASE", _DEFAULT_API_BASE))).rstrip("/")
        self.TIMEOUT_SECONDS: float = float(rest_cfg.get("timeout_seconds", os.getenv("REST_TIMEOUT_SECONDS", "30")))
        self.USER_AGENT: str = str(
            rest_cfg.get("user_agent", os.getenv("REST_USER_AGENT", "DiscordBot (threadkeeper, 0.1.0)"))
        )
