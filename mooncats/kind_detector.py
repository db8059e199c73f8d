"""Kind detection for doc.json definitions."""

from dataclasses import dataclass
from enum import Enum

from mooncats.schema import DefineType, Definition


class DefineRole(Enum):
    """Which doc tree pass consumes a definition."""
    ITEM = 'item'
    SET_FIELD = 'set_field'
    TABLE_FIELD = 'table_field'
    OTHER = 'other'


@dataclass
class KindDetectionResult:
    define_type: DefineType
    role: DefineRole

    @property
    def is_primary(self) -> bool:
        return self.role is DefineRole.ITEM


class KindDetector:
    """Determines a definition's role from its head define.

    ``doc.field`` and ``setmethod`` heads are OTHER: class members arrive
    through the class definition's own ``fields``.
    """

    ROLE_MAP = {
        DefineType.DOC_ALIAS: DefineRole.ITEM,
        DefineType.DOC_CLASS: DefineRole.ITEM,
        DefineType.DOC_ENUM: DefineRole.ITEM,
        DefineType.SET_GLOBAL: DefineRole.ITEM,
        DefineType.SET_FIELD: DefineRole.SET_FIELD,
        DefineType.SET_INDEX: DefineRole.SET_FIELD,
        DefineType.TABLE_FIELD: DefineRole.TABLE_FIELD,
    }

    def detect(self, definition: Definition) -> KindDetectionResult:
        define_type = definition.head.define_type
        role = self.ROLE_MAP.get(define_type, DefineRole.OTHER)
        return KindDetectionResult(define_type, role)
