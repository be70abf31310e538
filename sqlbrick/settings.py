"""Process-wide fragment settings.

The defaults reproduce the canonical output byte for byte; override them once
at start-up if a different poison marker or diagnostic notice is wanted::

    import sqlbrick

    sqlbrick.configure(poison_marker="/* BROKEN */ ", log_failures=False)

Only diagnostic text is configurable.  Identifier and literal quoting rules
are fixed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FragmentSettings(BaseModel):
    """Diagnostic behaviour shared by every fragment.

    Attributes:
        poison_marker: Token appended to a fragment's buffer whenever a
            failure is injected or merged, so inspecting the raw buffer
            without ``build()`` still shows the fragment is broken.
        missing_variable_notice: Text appended after an unresolved template
            placeholder's name.
        log_failures: Emit log records when failures are recorded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    poison_marker: str = Field(default="<<<FAILURE ", min_length=1)
    missing_variable_notice: str = " <- VARIABLE NOT FOUND   "
    log_failures: bool = True


_active: FragmentSettings = FragmentSettings()


def get_settings() -> FragmentSettings:
    """Return the active settings."""
    return _active


def configure(**overrides: object) -> FragmentSettings:
    """Install settings built from the active ones plus ``overrides``.

    Raises:
        pydantic.ValidationError: If an override is unknown or invalid.
    """
    global _active
    _active = FragmentSettings.model_validate(
        {**_active.model_dump(), **overrides}
    )
    return _active


def reset_settings() -> FragmentSettings:
    """Restore the default settings."""
    global _active
    _active = FragmentSettings()
    return _active
