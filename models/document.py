"""Documents attached to projects.

The Document owns the project_documents link table: attaching a Document to
a Project is persisted through ``Document.projects``.
"""
from database import db
from models.mixins import AuditMixin

project_documents = db.Table(
    "project_documents",
    db.Column("document_id", db.Integer, db.ForeignKey("document.id", ondelete="CASCADE"), primary_key=True),
    db.Column("project_id", db.Integer, db.ForeignKey("project.id", ondelete="CASCADE"), primary_key=True),
)


class Document(AuditMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    file_name = db.Column(db.String(255), nullable=True)

    projects = db.relationship(
        "Project",
        secondary=project_documents,
        order_by="Project.id.desc()",
        lazy="selectin",
    )

    def add_project(self, project):
        if project not in self.projects:
            self.projects.append(project)
        return self

    def remove_project(self, project):
        if project in self.projects:
            self.projects.remove(project)
        return self

    def to_dict(self):
        return {"id": self.id, "name": self.name, "file_name": self.file_name}

    def __repr__(self):
        return f"<Document {self.name}>"
