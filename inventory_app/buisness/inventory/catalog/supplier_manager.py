from __future__ import annotations

from inventory_app import db
from inventory_app.data.inventory.supplier import Supplier, SupplierStatus
from inventory_app.buisness.inventory.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from inventory_app.buisness.inventory.validation import optional_text, parse_enum, require_text
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.buisness.inventory.catalog.supplier")

CONTACT_FIELDS = ('contact_person', 'phone', 'address')


class SupplierManager:
    """
    Supplier lifecycle.

    Suppliers only reference their products and orders for reporting, so a
    supplier that is still referenced cannot be deleted.
    """

    def get(self, supplier_id: int) -> Supplier:
        supplier = db.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError(f"Supplier not found with id: {supplier_id}")
        return supplier

    def _check_unique(self, name: str | None, email: str | None, exclude_id: int | None = None) -> None:
        if name is not None:
            query = Supplier.query.filter(db.func.lower(Supplier.name) == name.lower())
            if exclude_id is not None:
                query = query.filter(Supplier.id != exclude_id)
            if query.first() is not None:
                raise ConflictError(f"Supplier with name '{name}' already exists")
        if email is not None:
            query = Supplier.query.filter(db.func.lower(Supplier.email) == email.lower())
            if exclude_id is not None:
                query = query.filter(Supplier.id != exclude_id)
            if query.first() is not None:
                raise ConflictError(f"Supplier with email '{email}' already exists")

    def _parse_email(self, value) -> str | None:
        email = optional_text(value)
        if email is not None and '@' not in email:
            raise InvalidArgumentError("email must be a valid email address")
        return email

    def create(self, data: dict) -> Supplier:
        name = require_text(data, 'name')
        email = self._parse_email(data.get('email'))
        status = parse_enum(SupplierStatus, data['status'], 'status') if data.get('status') else SupplierStatus.ACTIVE
        self._check_unique(name, email)

        supplier = Supplier(name=name, email=email, status=status)
        for field in CONTACT_FIELDS:
            setattr(supplier, field, optional_text(data.get(field)))
        db.session.add(supplier)
        db.session.flush()
        logger.info(f"Created supplier {supplier.name} (ID: {supplier.id})")
        return supplier

    def update(self, supplier_id: int, data: dict) -> Supplier:
        supplier = self.get(supplier_id)
        if 'name' in data:
            name = require_text(data, 'name')
            self._check_unique(name, None, exclude_id=supplier.id)
            supplier.name = name
        if 'email' in data:
            email = self._parse_email(data.get('email'))
            self._check_unique(None, email, exclude_id=supplier.id)
            supplier.email = email
        if data.get('status'):
            supplier.status = parse_enum(SupplierStatus, data['status'], 'status')
        for field in CONTACT_FIELDS:
            if field in data:
                setattr(supplier, field, optional_text(data.get(field)))
        db.session.flush()
        logger.info(f"Updated supplier {supplier.name} (ID: {supplier.id})")
        return supplier

    def set_status(self, supplier_id: int, status: SupplierStatus) -> Supplier:
        supplier = self.get(supplier_id)
        previous = supplier.status
        supplier.status = status
        db.session.flush()
        logger.info(f"Supplier {supplier.name} status {previous.value} -> {status.value}")
        return supplier

    def activate(self, supplier_id: int) -> Supplier:
        return self.set_status(supplier_id, SupplierStatus.ACTIVE)

    def deactivate(self, supplier_id: int) -> Supplier:
        return self.set_status(supplier_id, SupplierStatus.INACTIVE)

    def suspend(self, supplier_id: int) -> Supplier:
        return self.set_status(supplier_id, SupplierStatus.SUSPENDED)

    def delete(self, supplier_id: int) -> None:
        supplier = self.get(supplier_id)
        product_count = supplier.products.count()
        order_count = supplier.orders.count()
        if product_count or order_count:
            raise ConflictError(
                f"Cannot delete supplier '{supplier.name}': referenced by "
                f"{product_count} product(s) and {order_count} order(s)"
            )
        db.session.delete(supplier)
        db.session.flush()
        logger.info(f"Deleted supplier {supplier.name} (ID: {supplier_id})")
