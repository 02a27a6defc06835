# src/cls_kit/parsers/base.py

from abc import ABC, abstractmethod

from cls_kit.decoding.cursor import BytesLike

from .models import Document


class DocumentParser(ABC):
    @abstractmethod
    def parse(self, source: BytesLike) -> Document:
        """
        Decode a complete in-memory buffer into a validated Document.

        Requirements:
        - Deterministic output for same input
        - Offsets are buffer-global
        - Either a fully valid Document or exactly one ParseError
        - The Document keeps no reference to `source`
        """
        raise NotImplementedError
