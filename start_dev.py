"""Development server with auto-reload and debug mode.

Usage::

    python start_dev.py          # default: 0.0.0.0:4100, debug=True
    FLOWL_PORT=5000 python start_dev.py
    FLOWL_MQTT_DISABLED=true python start_dev.py
"""

from __future__ import annotations

import os
import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

# Sensible dev defaults
os.environ.setdefault("FLOWL_DB_PATH", "data/flowl.db")
os.environ.setdefault("FLOWL_DEBUG", "True")

from app import create_app
from app.config import load_config

config = load_config()
app = create_app(bootstrap_runtime=True)

if __name__ == "__main__":
    print(f"\n  🪴  Flowl dev server → http://{config.host}:{config.port}\n")

    try:
        # The reloader would fork a second process with its own broker connection
        app.run(host=config.host, port=config.port, debug=True, use_reloader=False)
    except KeyboardInterrupt:
        print("\n  ⏹  Stopped.")
