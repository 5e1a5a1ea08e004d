#!/usr/bin/env python3
"""
Seed the path template catalog with embeddings.

Reads templates from a JSON catalog, embeds each one with the same text
strategy the engine uses at query time (get_template_embed_text), then writes
the catalog back out with vectors and/or upserts it into Qdrant.

Requires:
  - OPENAI_API_KEY in env (or --openai-key)
  - For --qdrant: QDRANT_URL in env (or --qdrant-url)

Usage:
  From repo root:
    # Write a catalog with embeddings (used by TEMPLATE_SOURCE=json without re-embedding)
    python -m junie_server.scripts.seed_templates --output data/path_templates.embedded.json

    # Upsert into Qdrant
    python -m junie_server.scripts.seed_templates --qdrant --recreate

  Optional:
    --input junie_server/data/path_templates.json
    --dry-run
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from path_engine.embedding import get_template_embed_text
from path_engine.models.template import PathTemplate
from path_engine.stores import ensure_templates

from ..config import get_config
from ..services.embedding_generator import EmbeddingGenerator
from ..services.qdrant_store import QdrantTemplateStore
from ..services.template_store import load_template_records



async def embed_templates(
    templates: List[PathTemplate], generator: EmbeddingGenerator
) -> List[PathTemplate]:
    """Return copies of the templates with fresh embeddings."""
    texts = [get_template_embed_text(t) for t in templates]
    vectors = await generator.generate_batch(texts)
    return [t.model_copy(update={"embedding": v}) for t, v in zip(templates, vectors)]


def write_catalog(templates: List[PathTemplate], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "version": "1.0",
        "templates": [t.model_dump(mode="json") for t in templates],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


async def seed(args: argparse.Namespace) -> int:
    cfg = get_config()
    input_path = args.input or cfg.templates_json_path
    records = load_template_records(input_path)
    templates, quarantined = ensure_templates(records)
    for record_id, reason in quarantined:
        print(f"  skipped {record_id}: {reason}", file=sys.stderr)
    if not templates:
        print(f"No valid templates in {input_path}", file=sys.stderr)
        return 1

    active = sum(1 for t in templates if t.is_active)
    print(f"Templates: {len(templates)} ({active} active) from {input_path}")

    generator = EmbeddingGenerator(
        api_key=args.openai_key,
        model=cfg.embedding_model,
        dimensions=cfg.embedding_dimensions,
    )
    texts = [get_template_embed_text(t) for t in templates]
    print(f"Estimated embedding cost: ${generator.estimate_cost(texts):.6f}")
    if args.dry_run:
        return 0

    if not generator.api_key:
        print("OPENAI_API_KEY (or --openai-key) required.", file=sys.stderr)
        return 1

    embedded = await embed_templates(templates, generator)
    print(f"Embedded {len(embedded)} templates ({cfg.embedding_dimensions} dims)")

    if args.output:
        write_catalog(embedded, args.output)
        print(f"Wrote {args.output}")

    if args.qdrant:
        store = QdrantTemplateStore(args.qdrant_url or cfg.qdrant_url, args.collection or cfg.qdrant_collection)
        try:
            await store.ensure_collection(cfg.embedding_dimensions, recreate=args.recreate)
            written = await store.upsert_templates(embedded)
            print(f"Upserted {written} templates into {store.collection_name}")
        finally:
            await store.close()
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Embed path templates and seed the template store")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Template catalog JSON (default: TEMPLATES_JSON_PATH)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the catalog with embeddings to this path",
    )
    parser.add_argument("--qdrant", action="store_true", help="Upsert embedded templates into Qdrant")
    parser.add_argument("--qdrant-url", default=None, help="Qdrant URL (default: QDRANT_URL env)")
    parser.add_argument("--collection", default=None, help="Qdrant collection (default: QDRANT_COLLECTION)")
    parser.add_argument("--recreate", action="store_true", help="Drop and recreate the Qdrant collection")
    parser.add_argument("--dry-run", action="store_true", help="Validate and estimate cost only")
    parser.add_argument(
        "--openai-key",
        default=os.environ.get("OPENAI_API_KEY"),
        help="OpenAI API key (default: OPENAI_API_KEY env)",
    )
    args = parser.parse_args(argv)
    if not (args.output or args.qdrant or args.dry_run):
        parser.error("nothing to do: pass --output, --qdrant, or --dry-run")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return asyncio.run(seed(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
