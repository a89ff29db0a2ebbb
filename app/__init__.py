"""
SaarthiX Jobs API
Job and talent marketplace backend.

Architecture:
- MongoDB: every record (users, profiles, jobs, applications, shortlists)
- Matching: rule-based job scoring (skills / location / experience)
- Student database: filtered, projected applicant views for industry users
"""

__version__ = "1.0.0"
