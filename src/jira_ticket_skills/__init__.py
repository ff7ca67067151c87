"""Install Jira ticket resolution skills for AI coding tools."""

__version__ = "1.0.0"
