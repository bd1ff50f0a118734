import logging
import os

logger = logging.getLogger(__name__)


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("circlebot", {})
        discord_cfg = cfg.get("discord", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))

        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)
        self.GUILD_ID: int = int(discord_cfg.get("guild_id") or os.getenv("GUILD_ID", "0"))
        self.ACTIVITY: str = str(
            discord_cfg.get("activity", os.getenv("ACTIVITY", "the circles directory"))
        )

        required = [
            ("DISCORD_API_TOKEN", self.DISCORD_API_TOKEN),
            ("GUILD_ID", self.GUILD_ID),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
