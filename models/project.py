"""A Project is the aggregate root of the domain.

A Project belongs to exactly one Client
A Project has one ProjectStatus and one ProjectType
A Project owns its Tasks: removing a Task from the project deletes it
A Project lists the Documents attached to it, but the Document owns that link
A Project is never removed from the database, it is deactivated instead

"""
from __future__ import annotations

from sqlalchemy.orm import validates

from database import db
from models.mixins import ActiveMixin, AuditMixin
from utils.rendering import render_description_html


class Project(ActiveMixin, AuditMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    client_id = db.Column(db.Integer, db.ForeignKey("client.id"), nullable=False, index=True)
    status_id = db.Column(db.Integer, db.ForeignKey("project_status.id"), nullable=False, index=True)
    type_id = db.Column(db.Integer, db.ForeignKey("project_type.id"), nullable=False, index=True)

    client = db.relationship("Client", back_populates="projects")
    status = db.relationship("ProjectStatus", lazy="joined")
    type = db.relationship("ProjectType", lazy="joined")
    # Task.project is kept in step by add_task/remove_task rather than a backref.
    tasks = db.relationship(
        "Task",
        order_by="Task.id",
        lazy="selectin",
        cascade="all, delete-orphan",
        overlaps="project",
    )
    documents = db.relationship(
        "Document",
        secondary="project_documents",
        order_by="Document.id.desc()",
        lazy="selectin",
        viewonly=True,
    )

    @validates("id")
    def _validate_id(self, key, value):
        if self.id is not None and value != self.id:
            raise ValueError(f"Project id is immutable once assigned (current: {self.id}).")
        return value

    def add_task(self, task):
        if task not in self.tasks:
            self.tasks.append(task)
            task.project = self
        return self

    def remove_task(self, task):
        if task in self.tasks:
            self.tasks.remove(task)
            # set the owning side to None (unless already changed)
            if task.project is self:
                task.project = None
        return self

    def add_document(self, document):
        if document not in self.documents:
            self.documents.append(document)
        return self

    def remove_document(self, document):
        if document in self.documents:
            self.documents.remove(document)
        return self

    @property
    def search_text(self) -> str:
        """Text fed to the free-text search index."""

        return " ".join([self.name or "", self.description or ""])

    @property
    def description_html(self):
        return render_description_html(self.description)

    def __repr__(self):
        return f"<Project {self.name}>"
