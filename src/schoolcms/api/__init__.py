"""
SchoolCMS HTTP layer: JSON API routers and the admin console.

Use ``schoolcms.api.main.create_app()`` to build an application.
"""
