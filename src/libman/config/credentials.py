"""Startup credentials read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

CLIENT_ID_ENV = "LIBMAN_ID"
CLIENT_SECRET_ENV = "LIBMAN_SECRET"  # nosec B105
REDIRECT_URI_ENV = "LIBMAN_REDIRECT_URI"

_DESCRIPTIONS = {
    CLIENT_ID_ENV: "a spotify client id",
    CLIENT_SECRET_ENV: "a spotify api client secret",
    REDIRECT_URI_ENV: "a configured redirect uri",
}


class MissingCredentialError(RuntimeError):
    """Raised when a required credential variable is unset or empty."""

    def __init__(self, variable: str) -> None:
        """Build the user-facing diagnostic for one missing variable.

        Args:
            variable: Environment variable name.
        """
        super().__init__(
            f"you must set the {variable} env variable to {_DESCRIPTIONS[variable]}"
        )
        self.variable = variable


class Credentials(BaseModel):
    """OAuth client credentials."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    redirect_uri: str = Field(min_length=1)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Credentials:
        """Read credentials from environment variables.

        Args:
            environ: Optional mapping to read instead of `os.environ`.

        Returns:
            Populated credentials.

        Raises:
            MissingCredentialError: If any variable is unset or empty.
        """
        source = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field, variable in (
            ("client_id", CLIENT_ID_ENV),
            ("client_secret", CLIENT_SECRET_ENV),
            ("redirect_uri", REDIRECT_URI_ENV),
        ):
            value = source.get(variable, "").strip()
            if not value:
                raise MissingCredentialError(variable)
            values[field] = value
        return cls(**values)
