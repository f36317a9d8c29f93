"""
Runtime configuration for the catalog CLI.

Values come from environment variables (optionally loaded from a ``.env``
file by the entry point via python-dotenv) and are validated by a
Pydantic model so a bad setting fails at startup, not mid-query.

Environment variables:
  - ``MUDRA_BONDS_FILE``: path to the JSON bond file.
  - ``MUDRA_LOG_DIR``: directory for rotated log files.
  - ``MUDRA_DEFAULT_SORT``: default listing order (e.g. ``price-asc``).
  - ``MUDRA_INCLUDE_INACTIVE``: ``1``/``true``/``yes`` to show inactive bonds.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from mudra.catalog.schemas import SortKey

_TRUTHY = {"1", "true", "yes", "on"}


class CatalogConfig(BaseModel):
    """Settings shared by every catalog entry point."""

    data_file: str = Field(
        "data/bonds.json",
        description="JSON bond file used by the fallback repository",
    )
    log_dir: str = Field("logs", description="Directory for log files")
    default_sort: SortKey = Field(
        SortKey.RETURN_RATE_DESC,
        description="Listing order when none is requested",
    )
    include_inactive: bool = Field(
        False,
        description="Serve bonds flagged isActive=false",
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CatalogConfig":
        """Build a config from *environ* (defaults to ``os.environ``).

        Unset variables keep the model defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
                                      (e.g. an unknown sort key).
        """
        env = os.environ if environ is None else environ
        values = {}

        if env.get("MUDRA_BONDS_FILE"):
            values["data_file"] = env["MUDRA_BONDS_FILE"]
        if env.get("MUDRA_LOG_DIR"):
            values["log_dir"] = env["MUDRA_LOG_DIR"]
        if env.get("MUDRA_DEFAULT_SORT"):
            values["default_sort"] = env["MUDRA_DEFAULT_SORT"]
        if env.get("MUDRA_INCLUDE_INACTIVE"):
            values["include_inactive"] = (
                env["MUDRA_INCLUDE_INACTIVE"].strip().lower() in _TRUTHY
            )

        return cls(**values)
