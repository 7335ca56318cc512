""" Represents a user in the system.

Users can login to the system to get access to the project resource.
A User holds a list of permissions (ROLE_PROJECT_LIST, ROLE_PROJECT_CREATE, ...)
Each operation of the project resource requires one permission
A User with the admin role holds every permission

"""

from werkzeug.security import generate_password_hash, check_password_hash
from database import db


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.Text)
    role = db.Column(db.String(80), nullable=False, default='user')
    name = db.Column(db.String(80), nullable=False)
    permissions = db.Column(db.JSON, nullable=False, default=list)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    ADMIN = 'admin'
    USER = 'user'

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def has_permission(self, permission: str) -> bool:
        """True when the user may perform the operation guarded by ``permission``."""

        if self.role == self.ADMIN:
            return True
        return permission in (self.permissions or [])

    def grant(self, *permissions: str) -> None:
        current = list(self.permissions or [])
        for permission in permissions:
            if permission not in current:
                current.append(permission)
        # Reassign so the JSON column is flagged dirty.
        self.permissions = current

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "role": self.role,
            "permissions": list(self.permissions or []),
        }

    def __repr__(self):
        return f"<User {self.id}>"
