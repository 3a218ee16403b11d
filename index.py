import os

from livetiming_mirror.config import HOST, LOG_LEVEL
from livetiming_mirror.logging_config import configure_logging
from livetiming_mirror.main import create_app

# ─────────────────────────────
# ⚙️ Logging + app (fails fast without AUTH_KEY_SECRET)
# ─────────────────────────────
configure_logging(LOG_LEVEL)
app = create_app()

# ─────────────────────────────
# 🧩 Local run (for debugging)
# ─────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("index:app", host=HOST, port=int(os.getenv("PORT", "8000")))
