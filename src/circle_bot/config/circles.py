import os

_DEFAULT_HEADER_IMAGE = (
    "https://cdn.discordapp.com/attachments/537776612238950410/826695146250567681/circles.png"
)
_DEFAULT_APPLY_URL = "https://apply.acmutd.co/circles"


class Circles:
    def __init__(self, config: dict | None = None) -> None:
        circles_cfg = (config or {}).get("circlebot", {}).get("circles", {})
        self.JOIN_CHANNEL_ID: int = int(circles_cfg.get("join_channel", os.getenv("CIRCLES_JOIN_CHANNEL", "0")))
        self.PARENT_CATEGORY_ID: int = int(
            circles_cfg.get("parent_category", os.getenv("CIRCLES_PARENT_CATEGORY", "0"))
        )
        self.HEADER_IMAGE_URL: str = str(circles_cfg.get("header_image", os.getenv("CIRCLES_HEADER_IMAGE", _DEFAULT_HEADER_IMAGE)))
        self.APPLY_URL: str = str(circles_cfg.get("apply_url", os.getenv("CIRCLES_APPLY_URL", _DEFAULT_APPLY_URL)))
        # Number of old join-channel messages wiped before a repost.
        self.REPOST_HISTORY_LIMIT: int = int(
            circles_cfg.get("repost_history_limit", os.getenv("CIRCLES_REPOST_HISTORY_LIMIT", "50"))
        )
        # Seconds between background recaches; 0 disables the scheduler.
        self.RECACHE_INTERVAL: float = float(
            circles_cfg.get("recache_interval", os.getenv("CIRCLES_RECACHE_INTERVAL", "3600"))
        )
