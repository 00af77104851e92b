# Copyright 2025 iGenius S.p.A
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from functools import lru_cache

from pydantic import Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized environment configuration for acceptance-probe.

    Env var naming: ACCEPTANCE_PROBE_<FIELD_NAME>.
    A .env file in CWD is read automatically.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACCEPTANCE_PROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- General -------------------------------------------------------------
    log_level: str = "INFO"

    # --- Timeouts ------------------------------------------------------------
    startup_timeout_s: PositiveFloat = Field(
        default=360.0,
        description="Budget for a target to come back after a restart",
    )  # ACCEPTANCE_PROBE_STARTUP_TIMEOUT_S
    startup_probe_timeout_s: PositiveFloat = Field(
        default=60.0,
        description="Budget for the version header to show up on first start",
    )
    poll_interval_s: PositiveFloat = Field(
        default=1.0,
        description="Pause between two poll attempts",
    )
    request_timeout_s: PositiveFloat = Field(
        default=5.0,
        description="Per-request HTTP timeout used by probes",
    )

    # --- Target --------------------------------------------------------------
    version_header: str = Field(
        default="X-Jenkins",
        description="Response header carrying the target version",
    )
    status_path: str = Field(
        default="api/json",
        description="Sub-path of the machine readable status endpoint",
    )
    status_tree: str | None = Field(
        default="nodeName",
        description="Tree filter passed to the status endpoint",
    )

    @field_validator("status_path")
    @classmethod
    def _strip_leading_slash(cls, v: str) -> str:
        return v.lstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached accessor. Call this wherever you need settings.
    Tests can `cache_clear()` before reading to pick up monkeypatched env.
    """
    return Settings()


def reload_settings_cache() -> None:
    get_settings.cache_clear()  # type: ignore[attr-defined]
