# Alkalmazás szintű kivételek; az app/main.py HTTP válasszá alakítja őket

class EntityNotFound(Exception):
    """A keresett azonosítójú rekord nem létezik (HTTP 404)."""

    def __init__(self, model_name: str, entity_id):
        super().__init__(f"{model_name} #{entity_id} nem található")
        self.model_name = model_name
        self.entity_id = entity_id


class DomainError(Exception):
    """Hibás felhasználói bemenet egy domain műveletnél (HTTP 400).

    Az üzenet magyar, közvetlenül a felhasználónak szól.
    """


class ExtractionError(Exception):
    """Az OCR / LLM nem adott használható adatot (HTTP 422)."""

    DEFAULT_MESSAGE = "Nem sikerült beolvasni. Próbálj élesebb képet vagy tördeld kisebb részekre!"

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
