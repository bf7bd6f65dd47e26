"""Administrative announcement broadcast service.

Operators fan a message out to approved members as one notification per
recipient; the service regroups those copies into logical announcements.
"""
