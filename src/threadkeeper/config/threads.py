import os


class Threads:
    def __init__(self, config: dict | None = None) -> None:
        threads_cfg = (config or {}).get("threadkeeper", {}).get("threads", {})
        self.DEFAULT_ARCHIVE_LIMIT: int = int(
            threads_cfg.get("default_archive_limit", os.getenv("DEFAULT_ARCHIVE_LIMIT", "50"))
        )
