from __future__ import annotations

from qr_wifi.logging_config import setup_logging
from qr_wifi.webapp import create_app

app = create_app()
setup_logging(app.config["QR_WIFI_SETTINGS"].log_level)

if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
