"""Version 1 of the Hosting Scheduler API."""
