"""Document ID generator service.

Generates short opaque document IDs from a URL-safe alphabet. With 64
symbols and 8 positions the space holds 2**48 IDs, so existing documents
are not consulted for collisions.
"""

import re
import secrets


class IdGenerator:
    """Generator for 8-character URL-safe document IDs.

    Example IDs: V1StGXR8, Uakgb_J5, 2-x4Qe_z
    """

    ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
    LENGTH = 8

    # Regex pattern for valid document IDs
    PATTERN = re.compile(r"^[A-Za-z0-9_-]{8}$")

    @classmethod
    def generate(cls, length: int | None = None) -> str:
        """Generate a new random document ID.

        Args:
            length: Optional override of the ID length.

        Returns:
            A random ID drawn with a cryptographically secure source.
        """
        size = length or cls.LENGTH
        return "".join(secrets.choice(cls.ALPHABET) for _ in range(size))

    @classmethod
    def validate(cls, document_id: str) -> bool:
        """Check that a value looks like a generated document ID.

        Examples:
            >>> IdGenerator.validate("V1StGXR8")
            True
            >>> IdGenerator.validate("short")
            False
        """
        if not isinstance(document_id, str):
            return False
        return bool(cls.PATTERN.match(document_id))
