"""
SchoolCMS - content management backend for a school website.

Blogs, notices, special thanks, gallery folders, press media and alumni,
with images hosted on ImageKit and a session-gated admin console.
"""

__version__ = "0.1.0"
