# upstream: Riot platform-v3 champion rotation for the BR1 shard
RIOT_PLATFORM_HOST: str = "br1.api.riotgames.com"
ROTATION_PATH: str = "/lol/platform/v3/champion-rotations"
ROTATION_URL: str = f"https://{RIOT_PLATFORM_HOST}{ROTATION_PATH}"
RIOT_TOKEN_HEADER: str = "X-Riot-Token"
USER_AGENT: str = "RotationWatch/1.0 (champion-rotation)"

# upstream error bodies are truncated to this many characters
MAX_UPSTREAM_MESSAGE_LEN: int = 2000

# credential sources, checked in this order after the managed secret
RIOT_KEY_SECRET: str = "RIOT_KEY"
RIOT_KEY_ENV_VARS: tuple[str, ...] = ("RIOT_KEY", "RIOT_API_KEY", "RIOT_TOKEN")

# persisted state: one document
ROTATION_COLLECTION: str = "championRotation"
ROTATION_DOCUMENT: str = "current"

# push notification
ROTATION_TOPIC: str = "champion-rotation"
NOTIFICATION_TITLE: str = "Free champion rotation updated"
NOTIFICATION_BODY: str = "A new set of free champions is available. Check it out!"

# scheduled job
POLL_SCHEDULE: str = "every 6 hours"
POLL_TIMEZONE: str = "America/Sao_Paulo"

# per-function cap on concurrently running containers
MAX_INSTANCES: int = 10
