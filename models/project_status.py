from database import db
from models.mixins import ActiveMixin, TimestampMixin


class ProjectStatus(ActiveMixin, TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name}

    def __repr__(self):
        return f"<ProjectStatus {self.name}>"
