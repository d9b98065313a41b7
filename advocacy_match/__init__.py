"""
Advocacy Match: pairs speech and debate speakers with advocacy organizers
through shared causes.
"""

__version__ = "0.1.0"
