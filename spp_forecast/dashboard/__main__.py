"""Launch the dashboard with the Streamlit server."""

import sys
from pathlib import Path

from streamlit.web import cli as stcli

from spp_forecast.main.config import DashboardSettings


def main() -> None:
    settings = DashboardSettings()
    sys.argv = [
        "streamlit",
        "run",
        str(Path(__file__).with_name("app.py")),
        "--server.port",
        str(settings.port),
    ]
    sys.exit(stcli.main())


if __name__ == "__main__":
    main()
