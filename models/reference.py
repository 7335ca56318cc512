"""Reference data used when invoicing clients.

Rows are seeded by migrations and soft-deleted through ``deleted_at``.
"""
from database import db
from models.mixins import AuditMixin


class PaymentType(AuditMixin, db.Model):
    __tablename__ = "payment_type"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    deleted_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f"<PaymentType {self.name}>"


class ShipmentMethod(AuditMixin, db.Model):
    __tablename__ = "shipment_method"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    deleted_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f"<ShipmentMethod {self.name}>"
