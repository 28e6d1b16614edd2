"""fieldreport configuration — sheet endpoints, form defaults and logging."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Google Sheets CSV exports (read) and Apps Script web app (write)
    admin_csv_url: str = (
        "https://docs.google.com/spreadsheets/d/"
        "1EWdDVYYX7P5TcZElS54N6V49sCTJ5gnVkrgvhN1B9M4/export?format=csv"
    )
    logs_csv_url: str = ""
    submit_url: str = ""

    # Comma-separated canonical region names; empty exposes every region
    region_allow_list: str = ""

    # Form defaults
    default_latitude: str = "0.000000"
    default_longitude: str = "0.000000"
    default_urgency: str = "MEDIUM"

    # None keeps requests open until the remote side answers
    http_timeout: float | None = None

    @model_validator(mode="after")
    def _strip_urls(self) -> "Settings":
        """Strip whitespace/newlines from URLs — common paste error in dashboards."""
        for field in ("admin_csv_url", "logs_csv_url", "submit_url"):
            val = getattr(self, field)
            if val and val != val.strip():
                setattr(self, field, val.strip())
        self.default_urgency = self.default_urgency.strip().upper()
        return self

    @property
    def allowed_regions(self) -> set[str] | None:
        names = {name.strip() for name in self.region_allow_list.split(",") if name.strip()}
        return names or None

    # MLflow tracing of sheet fetches and submissions
    mlflow_tracking_uri: str = "sqlite:///mlruns/mlflow.db"
    mlflow_experiment_name: str = "fieldreport"

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
