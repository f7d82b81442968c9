"""YAML instrument loader and instrument registry."""

import hashlib
from pathlib import Path
from typing import Any, Iterator

import yaml

from screening.core.config import settings
from screening.core.exceptions import InvalidInstrument, UnknownInstrument
from screening.core.logging import get_logger
from screening.instruments.gad7 import GAD7
from screening.instruments.models import AnswerOption, Instrument, Question, SeverityBand
from screening.instruments.phq9 import PHQ9

logger = get_logger(__name__)

INSTRUMENT_SUFFIXES = (".yaml", ".yml")


def compute_definition_hash(content: str) -> str:
    """Compute SHA256 hash of instrument file content.

    Used for audit trail to ensure a definition hasn't been modified.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def instrument_from_dict(data: Any) -> Instrument:
    """Build an Instrument from plain data in the shape of Instrument.to_dict().

    Raises:
        InvalidInstrument: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise InvalidInstrument("Instrument definition must be a mapping")

    try:
        questions = [
            Question(
                id=str(q["id"]),
                text=str(q["text"]),
                options=[
                    AnswerOption(value=o["value"], label=str(o["label"]))
                    for o in q["options"]
                ],
            )
            for q in data["questions"]
        ]
        bands = [
            SeverityBand(low=int(b["low"]), high=int(b["high"]), label=str(b["label"]))
            for b in data["severity_bands"]
        ]
        return Instrument(
            id=str(data["id"]),
            title=str(data.get("title", data["id"])),
            description=str(data.get("description", "")),
            questions=questions,
            severity_bands=bands,
            version=str(data.get("version", "1.0.0")),
        )
    except KeyError as e:
        raise InvalidInstrument(f"Instrument definition missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidInstrument(f"Malformed instrument definition: {e}") from e


def load_instrument(path: Path) -> tuple[Instrument, str]:
    """Load an instrument YAML file and compute its hash.

    Args:
        path: Path to the instrument file

    Returns:
        Tuple of (Instrument, SHA256 hash of the file content)

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidInstrument: If the YAML or its structure is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Instrument definition not found: {path}")

    content = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidInstrument(f"Invalid YAML in {path.name}: {e}") from e

    return instrument_from_dict(data), compute_definition_hash(content)


class InstrumentRegistry:
    """Instruments available to sessions, keyed by id in registration order."""

    def __init__(
        self,
        instruments_dir: Path | None = None,
        include_builtin: bool = True,
    ) -> None:
        """Initialize registry.

        Args:
            instruments_dir: Directory of extra YAML definitions to register
            include_builtin: Whether to register PHQ-9 and GAD-7
        """
        self._instruments: dict[str, Instrument] = {}

        if include_builtin:
            self.register(PHQ9)
            self.register(GAD7)

        if instruments_dir is not None:
            self.load_directory(instruments_dir)

    def register(self, instrument: Instrument) -> None:
        """Register an instrument.

        Raises:
            InvalidInstrument: If an instrument with the same id is registered
        """
        if instrument.id in self._instruments:
            raise InvalidInstrument(f"Instrument {instrument.id!r} is already registered")
        self._instruments[instrument.id] = instrument

    def load_directory(self, instruments_dir: Path) -> list[Instrument]:
        """Load and register every YAML definition in a directory."""
        loaded = []
        for path in sorted(Path(instruments_dir).iterdir()):
            if path.suffix.lower() not in INSTRUMENT_SUFFIXES:
                continue
            instrument, file_hash = load_instrument(path)
            self.register(instrument)
            logger.info(
                f"Registered instrument {instrument.id} v{instrument.version} "
                f"from {path.name} (sha256={file_hash[:12]})"
            )
            loaded.append(instrument)
        return loaded

    def get(self, instrument_id: str) -> Instrument:
        """Get an instrument by id.

        Raises:
            UnknownInstrument: If no instrument has that id
        """
        try:
            return self._instruments[instrument_id]
        except KeyError:
            raise UnknownInstrument(instrument_id) from None

    def list_instruments(self) -> list[Instrument]:
        """Registered instruments in registration order."""
        return list(self._instruments.values())

    def __contains__(self, instrument_id: object) -> bool:
        return instrument_id in self._instruments

    def __iter__(self) -> Iterator[Instrument]:
        return iter(self._instruments.values())

    def __len__(self) -> int:
        return len(self._instruments)


_default_registry: InstrumentRegistry | None = None


def get_registry() -> InstrumentRegistry:
    """Get the default registry, built on first use from settings."""
    global _default_registry
    if _default_registry is None:
        _default_registry = InstrumentRegistry(instruments_dir=settings.instruments_dir)
    return _default_registry


def get_instrument(instrument_id: str) -> Instrument:
    """Look up an instrument in the default registry."""
    return get_registry().get(instrument_id)
