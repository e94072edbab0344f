from datetime import datetime

from sqlalchemy import (Column, String, ForeignKey, DateTime, Numeric,
                        Boolean, Index)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin, SoftDeleteMixin, UUIDPrimaryKeyMixin
from ..enums.courier_enums import (
    OrderStatus, PaymentStatus, OperatorStatus, DriverStatus, UserStatus
)


class Operator(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "operators"

    name = Column(String(200), nullable=False)
    code = Column(String(50), nullable=True, unique=True)
    status = Column(String(30), nullable=False, default=OperatorStatus.ACTIVE.value,
                    index=True)

    users = relationship("User", back_populates="operator")
    vehicles = relationship("Vehicle", back_populates="operator")
    drivers = relationship("Driver", back_populates="operator")


class Role(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "roles"

    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(100), nullable=False)

    user_roles = relationship("UserRole", back_populates="role")


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "users"

    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    phone = Column(String(50), nullable=True)
    operator_id = Column(String(36), ForeignKey("operators.id"),
                         nullable=True, index=True)
    is_customer = Column(Boolean, nullable=False, default=False)
    status = Column(String(30), nullable=False, default=UserStatus.ACTIVE.value)

    operator = relationship("Operator", back_populates="users")
    user_roles = relationship("UserRole", back_populates="user")


class UserRole(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "user_roles"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role_id = Column(String(36), ForeignKey("roles.id"), nullable=False)
    assigned_at = Column(DateTime, default=datetime.now, nullable=False)

    user = relationship("User", back_populates="user_roles")
    role = relationship("Role", back_populates="user_roles")


class Vehicle(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "vehicles"

    operator_id = Column(String(36), ForeignKey("operators.id"),
                         nullable=True, index=True)
    plate_number = Column(String(30), nullable=False)
    vehicle_type = Column(String(50), nullable=True)

    operator = relationship("Operator", back_populates="vehicles")
    vehicle_drivers = relationship("VehicleDriver", back_populates="vehicle")


class Driver(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "drivers"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    operator_id = Column(String(36), ForeignKey("operators.id"),
                         nullable=True, index=True)
    license_number = Column(String(50), nullable=True)
    status = Column(String(30), nullable=False, default=DriverStatus.AVAILABLE.value)

    operator = relationship("Operator", back_populates="drivers")
    vehicle_drivers = relationship("VehicleDriver", back_populates="driver")


class VehicleDriver(Base, UUIDPrimaryKeyMixin):
    """Assignment of a driver to a vehicle."""
    __tablename__ = "vehicle_drivers"

    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False,
                        index=True)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=False,
                       index=True)
    assigned_at = Column(DateTime, default=datetime.now, nullable=False)

    vehicle = relationship("Vehicle", back_populates="vehicle_drivers")
    driver = relationship("Driver", back_populates="vehicle_drivers")


class Order(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "orders"

    order_number = Column(String(50), nullable=True, unique=True)
    status = Column(String(40), nullable=False, default=OrderStatus.CREATED.value,
                    index=True)
    operator_id = Column(String(36), ForeignKey("operators.id"),
                         nullable=True, index=True)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False,
                         index=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"),
                        nullable=True, index=True)
    pickup_address = Column(String(500), nullable=True)
    delivery_address = Column(String(500), nullable=True)

    payments = relationship("Payment", back_populates="order")

    __table_args__ = (
        Index("ix_orders_operator_status", "operator_id", "status"),
    )


class Payment(Base, UUIDPrimaryKeyMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "payments"

    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    operator_id = Column(String(36), ForeignKey("operators.id"),
                         nullable=True, index=True)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=True,
                         index=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(30), nullable=False, default=PaymentStatus.PENDING.value,
                    index=True)
    paid_at = Column(DateTime, nullable=True)

    order = relationship("Order", back_populates="payments")
