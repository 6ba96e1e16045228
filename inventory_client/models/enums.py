"""Enumeration types for inventory entities and client pages."""

from enum import Enum


class ProductCategory(str, Enum):
    PRODUCT = "produto"
    CATALOG = "catalogo"
    COMBO = "combo"


class MaterialType(str, Enum):
    COMPONENT = "componente"
    INPUT = "insumo"
    PACKAGING = "embalagem"


class Page(str, Enum):
    DASHBOARD = "dashboard"
    ITEMS = "items"
    SUPPLIERS = "suppliers"
    CUSTOMERS = "customers"
    ADDRESSES = "addresses"
    PHONES = "phones"


class NoticeLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
