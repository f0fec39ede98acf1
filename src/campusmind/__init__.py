"""CampusMind — rule-based campus assistant for timetable, grades, attendance and spend."""

__version__ = "0.1.0"
