#!/usr/bin/env python3
"""
Command-line entry point for NPC generation.

Examples:
    npcgen generate --rating 3 --species Dwarf --role Cleric --seed 7
    npcgen rescale data/veteran.json --rating 5 --role Fighter -o out/captain.json
    npcgen rescale guard.json veteran.json --rating 2   # merged, then rescaled
"""

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from npcgen.api import generate_fresh_statblock, merge_statblocks, rescale_statblock
from npcgen.config import GeneratorSettings
from npcgen.exceptions import ConfigurationError, ConversionError, InvalidRatingFormat
from npcgen.flavor import FlavorRequest, GeminiFlavorProvider
from npcgen.foundry import convert_to_foundry, load_actor_file
from npcgen.logging_config import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and rescale D&D 5e NPC statblocks")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a fresh NPC sheet")
    generate.add_argument("--rating", "-r", required=True, help='Challenge rating, e.g. "1/4" or "5"')
    generate.add_argument("--species", default="Human")
    generate.add_argument("--role", default="Fighter")
    generate.add_argument("--alignment", help="Alignment (random if omitted)")
    generate.add_argument("--name", default="")
    generate.add_argument("--seed", type=int, help="Seed for reproducible output")
    generate.add_argument("--ai-name", action="store_true", help="Ask Gemini for a name when none is given")
    generate.add_argument("--foundry", action="store_true", help="Emit a FoundryVTT actor payload")
    generate.add_argument("--output", "-o", help="Write JSON here instead of stdout")

    rescale = subparsers.add_parser("rescale", help="Rescale FoundryVTT actor JSON to a new rating")
    rescale.add_argument("actors", nargs="+", help="Actor JSON file(s); several are merged first")
    rescale.add_argument("--rating", "-r", required=True, help="Target challenge rating")
    rescale.add_argument("--role", help="Role whose signature features are preserved")
    rescale.add_argument("--output", "-o", help="Write JSON here instead of stdout")

    return parser


def _write_output(payload: dict, output: Optional[str]) -> None:
    text = json.dumps(payload, indent=2)
    if output:
        output_file = Path(output)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(text, encoding="utf-8")
        logger.info(f"Saved {output_file}")
    else:
        print(text)


def _suggest_name(settings: GeneratorSettings, species: str, role: str, alignment: str) -> str:
    provider = GeminiFlavorProvider(settings)
    request = FlavorRequest(kind="name", species=species, role=role, alignment=alignment)
    result = asyncio.run(provider.generate(request))
    if result.success and result.content:
        return result.content[0]
    logger.warning(f"Name generation unavailable: {result.error}")
    return ""


def _run_generate(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    character = generate_fresh_statblock(
        args.rating,
        args.species,
        args.role,
        name=args.name,
        alignment=args.alignment,
        rng=rng,
        variance=settings.ability_variance,
    )
    if args.ai_name and not character.name:
        name = _suggest_name(settings, character.species, character.role, character.alignment)
        if name:
            character = character.model_copy(update={"name": name})

    if args.foundry:
        payload = convert_to_foundry(character.to_statblock(), character)
    else:
        payload = character.model_dump(mode="json", by_alias=True)
    _write_output(payload, args.output)
    return 0


def _run_rescale(args: argparse.Namespace) -> int:
    templates = [load_actor_file(Path(path)) for path in args.actors]

    template = merge_statblocks(templates)
    scaled = rescale_statblock(template, args.rating, role=args.role)
    _write_output(convert_to_foundry(scaled), args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = GeneratorSettings.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    level = logging.DEBUG if args.verbose else level_from_name(settings.log_level)
    setup_logging("npcgen", level=level)

    try:
        if args.command == "generate":
            return _run_generate(args, settings)
        return _run_rescale(args)
    except InvalidRatingFormat as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ConversionError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
