"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path

from provisio.config import ProvisioConfig, apply_signing_option, load_config
from provisio.constants.discovery import PROFILES_DIR
from provisio.signing.cache import GlobalCache
from provisio.signing.discovery import SigningDiscovery
from provisio.signing.matching import list_signing_options
from provisio.signing.orchestrator import resolve_signing
from provisio.types import JsonObject, SigningOverrides


def build_discovery(args: argparse.Namespace, config: ProvisioConfig | None = None) -> SigningDiscovery:
    """Wire a discovery instance from CLI flags, falling back to project config."""
    config = config or ProvisioConfig()
    cache_dir = args.cache_dir if args.cache_dir is not None else config.cache_dir
    profiles_dir = args.profiles_dir if args.profiles_dir is not None else PROFILES_DIR
    return SigningDiscovery(
        cache=GlobalCache(cache_dir),
        profiles_dir=profiles_dir,
        max_workers=config.max_workers,
    )


def handle_discover(args: argparse.Namespace) -> int:
    data = build_discovery(args).discover_all(force_refresh=args.force_refresh)
    _emit(data.to_dict())
    return 0


def handle_status(args: argparse.Namespace) -> int:
    status = build_discovery(args).get_status()
    _emit(status.to_dict())
    return 0


def handle_resolve(args: argparse.Namespace) -> int:
    """Resolve signing for the project at ``--root`` and print the result."""
    root: Path = args.root.resolve()
    config = load_config(root, args.config)
    overrides = merge_overrides(config.signing, args)
    bundle_id = args.bundle_id or config.bundle_id

    resolved = resolve_signing(
        bundle_id,
        args.platform,
        root,
        overrides,
        discovery=build_discovery(args, config),
        force_refresh=args.force_refresh,
    )
    _emit(resolved.to_dict())
    return 0


def handle_options(args: argparse.Namespace) -> int:
    """List per-team signing options and optionally pin the recommended one."""
    root: Path = args.root.resolve()
    config = load_config(root, args.config)
    bundle_id = args.bundle_id or config.bundle_id
    team = args.team or config.signing.team

    data = build_discovery(args, config).discover_all()
    options = list_signing_options(bundle_id, data, team=team, platform=args.platform)
    recommended = options[0] if options else None

    applied = False
    if args.apply and recommended is not None:
        apply_signing_option(root, recommended, args.config)
        applied = True

    _emit(
        {
            "bundle_id": bundle_id,
            "current_config": {
                "team": config.signing.team,
                "identity": config.signing.identity,
                "profile": config.signing.profile,
            },
            "options": [option.to_dict() for option in options],
            "recommended": recommended.to_dict() if recommended is not None else None,
            "applied": applied,
        }
    )
    return 0


def handle_clear_cache(args: argparse.Namespace) -> int:
    cache_dir = args.cache_dir if args.cache_dir is not None else ProvisioConfig().cache_dir
    removed = GlobalCache(cache_dir).clear()
    _emit({"removed": [str(path) for path in removed]})
    return 0


def merge_overrides(configured: SigningOverrides, args: argparse.Namespace) -> SigningOverrides:
    """Command-line flags win over ``provisio.yaml``, field by field."""
    merged = configured
    for key in ("team", "identity", "profile"):
        value = getattr(args, key, None)
        if value is not None:
            merged = replace(merged, **{key: value})
    return merged


def _emit(payload: JsonObject) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))
