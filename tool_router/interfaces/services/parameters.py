from abc import ABC, abstractmethod
from typing import Dict


class ParameterExtractor(ABC):
    """Interface for free-text parameter extraction."""

    @abstractmethod
    def extract(self, text: str) -> Dict[str, str]:
        """Map free text to a parameter map.

        Args:
            text: Raw user input

        Returns:
            Parameter name to string value
        """
        pass
