"""Scan a directory tree for RFP/proposal document pairs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from rfp_dataset.ingestion.decoders import ACCEPTED_EXTENSIONS
from rfp_dataset.models.document import DocumentPair

logger = logging.getLogger(__name__)

RFP_DIR = "rfp"
PROPOSAL_DIR = "proposal"


def list_sources(folder: Path) -> List[Path]:
    """Return the accepted files directly inside ``folder``, sorted by name."""
    if not folder.is_dir():
        return []
    sources: List[Path] = []
    for path in sorted(folder.iterdir()):
        if not path.is_file() or path.name.startswith("."):
            continue
        if path.suffix.lower() not in ACCEPTED_EXTENSIONS:
            logger.debug("Ignoring %s: extension not accepted", path)
            continue
        sources.append(path)
    return sources


def discover_pairs(root: Path) -> List[DocumentPair]:
    """Return one pair per sub-directory of ``root`` holding rfp/ and proposal/ folders."""
    root_path = Path(root)
    if not root_path.exists():
        logger.warning("Pairs root %s does not exist", root_path)
        return []

    pairs: List[DocumentPair] = []
    for pair_dir in sorted(p for p in root_path.iterdir() if p.is_dir() and not p.name.startswith(".")):
        pair = DocumentPair(
            pair_id=pair_dir.name,
            rfp=list_sources(pair_dir / RFP_DIR),
            proposal=list_sources(pair_dir / PROPOSAL_DIR),
        )
        if not pair.is_complete:
            logger.info(
                "Pair %s is incomplete (%s RFP files, %s proposal files)",
                pair.pair_id,
                len(pair.rfp),
                len(pair.proposal),
            )
        pairs.append(pair)
    logger.info("Discovered %s document pairs under %s", len(pairs), root_path)
    return pairs
