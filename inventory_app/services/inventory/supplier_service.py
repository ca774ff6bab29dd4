"""
Supplier Service
Read-side queries and analytics for suppliers.
"""

from typing import Dict, List

from sqlalchemy import or_

from inventory_app import db
from inventory_app.data.inventory.product import Product
from inventory_app.data.inventory.supplier import Supplier, SupplierStatus
from inventory_app.buisness.inventory.errors import NotFoundError
from inventory_app.buisness.inventory.validation import LIKE_ESCAPE, like_pattern
from inventory_app.buisness.reporting import alerts, analytics


class SupplierService:

    @staticmethod
    def get_all() -> List[Supplier]:
        return Supplier.query.order_by(Supplier.name).all()

    @staticmethod
    def get_by_id(supplier_id: int) -> Supplier:
        supplier = db.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError(f"Supplier not found with id: {supplier_id}")
        return supplier

    @staticmethod
    def get_by_name(name: str) -> Supplier:
        supplier = Supplier.query.filter(db.func.lower(Supplier.name) == name.lower()).first()
        if supplier is None:
            raise NotFoundError(f"Supplier not found with name: {name}")
        return supplier

    @staticmethod
    def get_by_status(status: SupplierStatus) -> List[Supplier]:
        return Supplier.query.filter_by(status=status).order_by(Supplier.name).all()

    @staticmethod
    def get_active() -> List[Supplier]:
        return SupplierService.get_by_status(SupplierStatus.ACTIVE)

    @staticmethod
    def search(term: str) -> List[Supplier]:
        """Case-insensitive match on name, email, contact person or address."""
        term = (term or '').strip()
        if not term:
            return SupplierService.get_all()
        pattern = like_pattern(term)
        return Supplier.query.filter(or_(
            Supplier.name.ilike(pattern, escape=LIKE_ESCAPE),
            Supplier.email.ilike(pattern, escape=LIKE_ESCAPE),
            Supplier.contact_person.ilike(pattern, escape=LIKE_ESCAPE),
            Supplier.address.ilike(pattern, escape=LIKE_ESCAPE),
        )).order_by(Supplier.name).all()

    @staticmethod
    def get_names() -> List[str]:
        return [row[0] for row in db.session.query(Supplier.name).order_by(Supplier.name).all()]

    @staticmethod
    def get_reliable() -> List[Supplier]:
        """Active suppliers with at least one product."""
        return Supplier.query.filter(
            Supplier.status == SupplierStatus.ACTIVE,
            Supplier.id.in_(db.session.query(Product.supplier_id).filter(Product.supplier_id.isnot(None))),
        ).order_by(Supplier.name).all()

    @staticmethod
    def count_by_status() -> Dict[str, int]:
        return analytics.count_by(Supplier.query.all(), lambda s: s.status)

    @staticmethod
    def group_by_city() -> Dict[str, List[str]]:
        """Supplier names grouped by the city token of their address; no address, no group."""
        with_address = [s for s in SupplierService.get_all() if s.address and s.address.strip()]
        groups = analytics.group_by(with_address, lambda s: analytics.city_token(s.address))
        return {city: [s.name for s in members] for city, members in groups.items()}

    @staticmethod
    def get_alerts() -> List[str]:
        return alerts.supplier_alerts(SupplierService.get_all())

    @staticmethod
    def count_active() -> int:
        return Supplier.query.filter_by(status=SupplierStatus.ACTIVE).count()

    @staticmethod
    def total_count() -> int:
        return Supplier.query.count()
