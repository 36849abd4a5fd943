"""Text-set loading with a built-in fallback corpus."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from anagrama.config import ContentConfig
from anagrama.models import Corpus, Language

logger = logging.getLogger(__name__)


DEFAULT_CORPUS = Corpus(
    title="Sonetos, anagramas y palíndromos",
    language=Language.ES,
    subtitles=["Introducción", "Primer Soneto", "Segundo Soneto"],
    texts=[
        "¡Vaya, tío, parece imposible!\nArmar dos sonetos palindrómicos con\n"
        "el mismo número de instancias de\ncada letra es tarea rococó, reto raro.\n"
        "Acalorado, agotado, no enojado,\nuno sólo otea, lee, relee, y\n"
        "no ve cómo amarrarse a tal amor\narduo, este arte barroco de agregar,\n"
        "avalar, acertar, errar sin anonadarse.\nPero el azar traza maravillas\n"
        "como nadie. Mola granjearse, a llama\naérea y magno rayo, este doloroso\n"
        "logro: la dualidad.",
        "Sé verla osarte lodo loco, loco.\nTarima de mi ser, billar en ego,\n"
        "rigor de parte con laúd. ¿Ya toco\nser tara, porte, moda? ¿Luz anego?\n\n"
        "Tarea roma de sal a ese decano.\nRima ramera y sana mesa dona.\n"
        "No roca, raro. Oírla. Saja, vano.\n¿O navaja, sal, rio? Orará corona.\n\n"
        "No da semanas. Ya remara, miro.\nNace, desea la sed, amor a Erato,\n"
        "gen azulado, metro para tres.\n\n¿O cota y dual? No cetra, Pedro, giro\n"
        "general, libre, sí, me da mi rato.\nColoco, lodo, letras, o al revés.",
        "«Amargan al azul». Y Adonis ora.\nReveló saco es lar rocoso, pero\n"
        "no, no me trae donosa musa a mora,\nmar de arte total, errata cero.\n\n"
        "No nota del resiego lo sajado.\nReverbérale goce, rasar cima.\n"
        "Y a mina di, letrada, cipo, lado.\nO dalo. Pica darte. Lid anima\n\n"
        "y a mí, crasa, recoge, la re-breve\nrodaja. Sólo géiser le da tono.\n"
        "No recatar. Relato te trae drama.\n\nRoma a suma sonó de arte mono.\n"
        "No reposo corral. Sé ocaso leve,\nraro, sin oda. Y luz al anagrama.",
    ],
)


class ContentLoadError(Exception):
    """A text set could not be read or did not validate."""


def text_set_path(name: str, texts_dir: Path) -> Path:
    return texts_dir / f"{name}.json"


def read_text_set(name: str, texts_dir: Path) -> Corpus:
    """Load and validate a named text set. Raises ContentLoadError."""
    path = text_set_path(name, texts_dir)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Corpus(**raw)
    except FileNotFoundError as e:
        raise ContentLoadError(f"Failed to load text set: {name}") from e
    except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
        raise ContentLoadError(f"Invalid text set {name}: {e}") from e


def load_corpus(name: str | None = None, config: ContentConfig | None = None) -> Corpus:
    """Load a text set by name, falling back to DEFAULT_CORPUS on any failure."""
    if config is None:
        config = ContentConfig()
    name = name or config.default_text_set

    try:
        corpus = read_text_set(name, config.resolved_texts_dir)
    except ContentLoadError as e:
        logger.warning("%s; using built-in corpus", e)
        return DEFAULT_CORPUS

    logger.info("Loaded text set %s: %d texts", name, len(corpus.texts))
    return corpus


def list_text_sets(config: ContentConfig | None = None) -> list[str]:
    if config is None:
        config = ContentConfig()
    texts_dir = config.resolved_texts_dir
    if not texts_dir.is_dir():
        return []
    return sorted(p.stem for p in texts_dir.glob("*.json"))
