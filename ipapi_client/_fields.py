# -*- coding: utf-8 -*-

from typing import FrozenSet, Union

from pydantic import BaseModel, ConfigDict

from ipapi_client._constants import (
    Field,
    Language,
    DEFAULT_LANGUAGE,
    FIELDS,
    LANGS,
    MINIMAL_FIELDS,
    MESSAGE_FIELD,
)


_FieldType = Union[Field, str]
_LanguageType = Union[Language, str]


def _to_field(tag: _FieldType) -> Field:
    if isinstance(tag, Field):
        return tag
    if isinstance(tag, str):
        return Field.from_key(tag)
    raise TypeError(f"field must be an instance of {Field} or a string, not {type(tag)}")


def _to_language(lang: _LanguageType) -> Language:
    if isinstance(lang, Language):
        return lang
    if isinstance(lang, str):
        if lang not in LANGS:
            raise ValueError(f"'{lang}' is not a supported language, use one of {sorted(LANGS)}")
        return Language(lang)
    raise TypeError(f"language must be an instance of {Language} or a string, not {type(lang)}")


class FieldSelector(BaseModel):
    """The set of requested response fields and the response language

    The selector is immutable: every configuration method returns a new
    selector, so one selector can be shared between requests and clients.

    Usage::

        selector = FieldSelector.empty().include(Field.COUNTRY, 'currency').with_language('de')

    """

    model_config = ConfigDict(frozen=True)

    selected: FrozenSet[Field] = frozenset()
    language: Language = DEFAULT_LANGUAGE

    @classmethod
    def empty(cls) -> 'FieldSelector':
        """Selector without optional fields to build your own from scratch
        """
        return cls()

    @classmethod
    def minimal(cls) -> 'FieldSelector':
        """Selector with the most useful fields only
        """
        return cls(selected=MINIMAL_FIELDS)

    @classmethod
    def maximal(cls) -> 'FieldSelector':
        """Selector with all fields
        """
        return cls(selected=FIELDS)

    def include(self, *tags: _FieldType) -> 'FieldSelector':
        fields = frozenset(_to_field(tag) for tag in tags)
        return self.model_copy(update={'selected': self.selected | fields})

    def exclude(self, *tags: _FieldType) -> 'FieldSelector':
        fields = frozenset(_to_field(tag) for tag in tags)
        return self.model_copy(update={'selected': self.selected - fields})

    def with_language(self, lang: _LanguageType) -> 'FieldSelector':
        return self.model_copy(update={'language': _to_language(lang)})

    @property
    def mask(self) -> int:
        """The numeric field mask, always includes the hidden message field
        """
        mask = MESSAGE_FIELD
        for field in self.selected:
            mask |= field
        return mask

    def render(self) -> str:
        """Renders the selector into a query string
        """
        query = f'fields={self.mask}'
        if self.language is not DEFAULT_LANGUAGE:
            query += f'&lang={self.language.value}'
        return query

    def __contains__(self, tag: object) -> bool:
        return tag in self.selected
