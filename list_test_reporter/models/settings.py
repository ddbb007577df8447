"""Run settings consumed by the reporter."""

from pydantic import Field

from list_test_reporter.models.base import Model


class ReporterSettings(Model):
    """Reporter configuration resolved once per run.

    ``None`` means the value was not configured and the default applies.
    """

    suppress_console_output: bool | None = Field(
        default=None,
        description="Silence stray writes to stdout/stderr while results are fed",
    )
    collapse_theories: bool | None = Field(
        default=None,
        description="Aggregate parameterized runs of a method into one line",
    )
    show_test_list: bool | None = Field(
        default=None,
        description="List individual results (the summary is always shown)",
    )

    @property
    def suppress_console_output_enabled(self) -> bool:
        """Effective suppress-console-output value (default: False)."""
        return bool(self.suppress_console_output)

    @property
    def collapse_theories_enabled(self) -> bool:
        """Effective collapse-theories value (default: True)."""
        return self.collapse_theories is not False

    @property
    def show_test_list_enabled(self) -> bool:
        """Effective show-test-list value (default: True)."""
        return self.show_test_list is not False

    def with_overrides(
        self,
        *,
        suppress_console_output: bool | None = None,
        collapse_theories: bool | None = None,
        show_test_list: bool | None = None,
    ) -> "ReporterSettings":
        """Return a copy where every non-None override replaces the current value."""
        overrides = {
            "suppress_console_output": suppress_console_output,
            "collapse_theories": collapse_theories,
            "show_test_list": show_test_list,
        }
        return self.model_copy(
            update={key: value for key, value in overrides.items() if value is not None}
        )
