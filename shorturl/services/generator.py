"""Short code generation."""

import random
import string


class CodeGenerator:
    """
    Produce random short codes from a fixed alphabet.

    The generator keeps no state between calls and never looks at the
    store; uniqueness is settled by the store's insert-if-absent.
    """

    DEFAULT_ALPHABET = string.ascii_letters + string.digits

    def __init__(self, alphabet: str = DEFAULT_ALPHABET, default_length: int = 6):
        if len(set(alphabet)) < 2:
            raise ValueError("alphabet needs at least two distinct characters")
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.alphabet = alphabet
        self.default_length = default_length
        self._random = random.SystemRandom()

    def generate(self, length: int = None) -> str:
        """Return a fresh random code of ``length`` characters."""
        length = length or self.default_length
        return "".join(self._random.choices(self.alphabet, k=length))
