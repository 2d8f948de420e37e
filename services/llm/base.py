from abc import ABC, abstractmethod

class TextGenerator(ABC):
    @abstractmethod
    async def generate(self, prompt: str) -> str: ...
