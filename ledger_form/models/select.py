"""
Select Option Model

A SelectOption is a presentation-only projection of one choice in a
select list. Option lists are regenerated on every render and never
mutated in place.
"""

from pydantic import BaseModel, ConfigDict

from ledger_form.models.dates import Day, Month, Year


class SelectOption(BaseModel):
    """One entry of a select list."""
    model_config = ConfigDict(frozen=True)

    value: str = ""
    display_text: str = ""
    selected: bool = False
    disabled: bool = False

    def with_selected(self, selected: bool) -> "SelectOption":
        """Copy of this option with the selected flag set."""
        return self.model_copy(update={"selected": selected})

    def with_disabled(self, disabled: bool) -> "SelectOption":
        """Copy of this option with the disabled flag set."""
        return self.model_copy(update={"disabled": disabled})

    @classmethod
    def from_text(cls, text: str) -> "SelectOption":
        """Option whose value and label are the same text (e.g. a category)."""
        return cls(value=text, display_text=text)

    @classmethod
    def from_year(cls, year: Year) -> "SelectOption":
        return cls(value=str(year), display_text=str(year))

    @classmethod
    def from_month(cls, month: Month) -> "SelectOption":
        """Month options carry the month number as value and its name as label."""
        return cls(value=str(int(month)), display_text=month.display_name)

    @classmethod
    def from_day(cls, day: Day) -> "SelectOption":
        return cls(value=str(day), display_text=str(day))
