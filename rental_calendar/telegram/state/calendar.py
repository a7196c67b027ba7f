from rental_calendar.services.calendar_session import CalendarSession

# user_id -> calendar shown to that user
calendar_sessions: dict[int, CalendarSession] = {}
