"""Users app package.

Defines the ``Customer`` account model used as AUTH_USER_MODEL, JWT
registration/login endpoints and the role-based permission classes the
other apps rely on.
"""
