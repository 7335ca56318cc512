"""A Client commissions Projects. Each Project belongs to a single Client."""
from database import db
from models.mixins import ActiveMixin, AuditMixin


class Client(ActiveMixin, AuditMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    projects = db.relationship("Project", back_populates="client", lazy=True)

    def to_dict(self):
        return {"id": self.id, "name": self.name}

    def __repr__(self):
        return f"<Client {self.name}>"
