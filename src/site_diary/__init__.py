"""Site diary package.

Tracks worker attendance on construction projects. Organized by feature
modules (diary, projects, personal, reports) with thin Flask controllers over
service and repository layers.
"""
