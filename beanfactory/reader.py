"""
MappingBeanDefinitionReader

Registers bean definitions from plain in-memory records, the shape that
configuration parsers produce:

    records = [
        {"id": "accountDao", "class": "app.dao.AccountDao"},
        {
            "id": "accountService",
            "class": "app.service.AccountService",
            "scope": "prototype",
            "constructor-args": [{"value": "42"}],
            "properties": [
                {"name": "dao", "ref": "accountDao"},
                {"name": "retries", "value": "3"},
            ],
        },
    ]
    MappingBeanDefinitionReader(factory).load_bean_definitions(records)

Reading files is left to the caller; this reader only maps records to
``BeanDefinition`` objects.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from .definition import BeanDefinition
from .exceptions import BeanDefinitionStoreError
from .scope import BeanScope
from .values import PropertyValue, RuntimeBeanReference, TypedStringValue

logger = logging.getLogger(__name__)

ID_ATTRIBUTE = "id"
CLASS_ATTRIBUTE = "class"
SCOPE_ATTRIBUTE = "scope"
CONSTRUCTOR_ARGS_ATTRIBUTE = "constructor-args"
PROPERTIES_ATTRIBUTE = "properties"
NAME_ATTRIBUTE = "name"
VALUE_ATTRIBUTE = "value"
REF_ATTRIBUTE = "ref"


class MappingBeanDefinitionReader:
    """Turns bean records into definitions and registers them.

    Attributes:
        registry: Anything with ``register_bean_definition(id, bd)``,
            normally a BeanFactory
    """

    def __init__(self, registry):
        self.registry = registry

    def load_bean_definitions(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Register one definition per record, in order.

        Args:
            records: Bean records

        Returns:
            The number of definitions registered

        Raises:
            BeanDefinitionStoreError: When a record is malformed. Records
                before the malformed one stay registered.
        """
        count = 0
        for index, record in enumerate(records):
            bd = self.parse_bean_definition(record, index)
            self.registry.register_bean_definition(bd.id, bd)
            count += 1
        logger.debug("Loaded %d bean definition(s)", count)
        return count

    def parse_bean_definition(self, record: Mapping[str, Any], index: int = 0) -> BeanDefinition:
        if not isinstance(record, Mapping):
            raise BeanDefinitionStoreError(
                f"Bean record #{index} must be a mapping, got {type(record).__name__}"
            )

        bean_id = record.get(ID_ATTRIBUTE)
        class_name = record.get(CLASS_ATTRIBUTE)
        if not bean_id:
            raise BeanDefinitionStoreError(f"Bean record #{index} has no '{ID_ATTRIBUTE}'")
        if not class_name:
            raise BeanDefinitionStoreError(
                f"Bean '{bean_id}' has no '{CLASS_ATTRIBUTE}'", bean_id=bean_id
            )

        bd = BeanDefinition(
            id=bean_id,
            bean_class_name=class_name,
            scope=BeanScope.from_token(record.get(SCOPE_ATTRIBUTE) or ""),
        )
        for arg in record.get(CONSTRUCTOR_ARGS_ATTRIBUTE) or []:
            bd.constructor_argument_values.append(self._parse_value(bean_id, arg))
        for prop in record.get(PROPERTIES_ATTRIBUTE) or []:
            bd.property_values.append(self._parse_property(bean_id, prop))
        return bd

    def _parse_property(self, bean_id: str, prop: Mapping[str, Any]) -> PropertyValue:
        name = prop.get(NAME_ATTRIBUTE) if isinstance(prop, Mapping) else None
        if not name:
            raise BeanDefinitionStoreError(
                f"Bean '{bean_id}' has a property without '{NAME_ATTRIBUTE}'",
                bean_id=bean_id,
            )
        return PropertyValue(name, self._parse_value(bean_id, prop, name))

    @staticmethod
    def _parse_value(bean_id: str, element: Any, name: Optional[str] = None) -> Any:
        where = f"property '{name}'" if name else "constructor argument"
        if not isinstance(element, Mapping):
            raise BeanDefinitionStoreError(
                f"Bean '{bean_id}' {where} must be a mapping", bean_id=bean_id
            )

        has_ref = REF_ATTRIBUTE in element
        has_value = VALUE_ATTRIBUTE in element
        if has_ref == has_value:
            raise BeanDefinitionStoreError(
                f"Bean '{bean_id}' {where} must have exactly one of "
                f"'{REF_ATTRIBUTE}' or '{VALUE_ATTRIBUTE}'",
                bean_id=bean_id,
            )
        if has_ref:
            ref = element[REF_ATTRIBUTE]
            if not ref:
                raise BeanDefinitionStoreError(
                    f"Bean '{bean_id}' {where} has an empty '{REF_ATTRIBUTE}'",
                    bean_id=bean_id,
                )
            return RuntimeBeanReference(ref)
        return TypedStringValue(element[VALUE_ATTRIBUTE])
