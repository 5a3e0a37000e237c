import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///calculator_hub.db").replace("postgres://", "postgresql://", 1)
SQLALCHEMY_DATABASE_URI = DATABASE_URL

SECRET_KEY = os.getenv("SECRET_KEY")

# Page size for exported result reports: 'A4' or 'letter'
PDF_PAGE_SIZE = os.getenv("PDF_PAGE_SIZE", "A4")

# Jinja2 whitespace control - prevents unwanted line breaks in rendered HTML
JINJA2_TRIM_BLOCKS = True
JINJA2_LSTRIP_BLOCKS = True
