from datetime import date

from rental_calendar.utils.dates import format_date_display


class Messages:
    """
    Centralized store for user-facing messages.
    """

    @property
    def AVAILABILITY_LOAD_FAILED(self) -> str:
        return "Unable to load availability. Please try again."

    @property
    def RANGE_UNAVAILABLE(self) -> str:
        return "These dates overlap a period when the property is not available."

    @property
    def PICK_START(self) -> str:
        return "📅 <b>Choose your arrival date</b>"

    @property
    def NO_PROPERTY(self) -> str:
        return (
            "🏠 <b>No property selected.</b>\n\n"
            "Send <code>/availability &lt;property id&gt;</code> to open its calendar."
        )

    @property
    def SESSION_EXPIRED(self) -> str:
        return "This calendar has expired, send /availability again"

    def pick_end(self, start_date: date) -> str:
        return (
            f"📅 <b>Choose your departure date</b>\n\n"
            f"Arrival: {format_date_display(start_date)}"
        )

    def range_rejected(self, conflict_date: date) -> str:
        return (
            f"❌ {self.RANGE_UNAVAILABLE}\n"
            f"First unavailable day: {format_date_display(conflict_date)}"
        )

    def stay_summary(
        self,
        start_date: date,
        end_date: date,
        nights: int,
        total_price: str | None = None,
    ) -> str:
        lines = [
            "✅ <b>Dates selected</b>",
            "",
            f"Arrival: {format_date_display(start_date)}",
            f"Departure: {format_date_display(end_date)}",
            f"Nights: {nights}",
        ]
        if total_price is not None:
            lines.append(f"Total: {total_price}")
        return "\n".join(lines)


messages = Messages()
