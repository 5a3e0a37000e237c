"""
Database models for the calculator hub.

The hub has no user accounts; the only table is the activity log that
records page visits, calculations and PDF exports per calculator.
"""
from datetime import datetime

from app import db


class LogEntry(db.Model):
    """
    One recorded calculator activity.

    `project` holds the calculator id ('mortgage', 'bmi', ...) or None for
    site-wide pages. `calculator_category` is the registry category of that
    calculator at the time of the event, so activity can be grouped by
    financial/health/math/general/fun without joining against the registry.
    `category` is the kind of activity: 'Visit', 'Calculate' or 'Export'.
    """
    id = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    project = db.Column(db.String(50), nullable=True, index=True)
    calculator_category = db.Column(db.String(20), nullable=True, index=True)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)

    def __repr__(self):
        return f'<LogEntry {self.timestamp} - {self.project}/{self.category}>'
