"""Abstract interface for free-text bill parsing."""

from abc import ABC, abstractmethod

from swipelite.core.entities.parsed_bill import ParsedBill


class IBillParser(ABC):
    """Turns an informal billing description into structured data."""

    @abstractmethod
    async def parse(self, text: str) -> ParsedBill:
        """
        Parse *text*.

        Raises:
            ParsingFailedError: The text could not be structured.
            LLMError: The backing service failed.
        """
        pass
