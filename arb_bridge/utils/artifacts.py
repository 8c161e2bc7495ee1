"""Loading compiled contract artifacts (hardhat or foundry output)."""

import json
import os
from pathlib import Path
from typing import Optional

from arb_bridge.exceptions import ArtifactNotFoundError

DEFAULT_ARTIFACTS_DIR = "artifacts"


def _artifacts_root(artifacts_dir: Optional[str]) -> Path:
    return Path(artifacts_dir or os.environ.get("ARTIFACTS_DIR", DEFAULT_ARTIFACTS_DIR))


def load_artifact(name: str, artifacts_dir: Optional[str] = None) -> tuple[list, str]:
    """
    Find `<name>.json` under the artifacts directory and return its ABI and bytecode.

    Args:
        name (str): Contract name, e.g. "GreeterL1".
        artifacts_dir (str, optional): Directory to search. Defaults to the
            ARTIFACTS_DIR environment variable, then "./artifacts".

    Returns:
        tuple: (abi, bytecode) of the compiled contract.
    """
    root = _artifacts_root(artifacts_dir)
    if not root.is_dir():
        raise ArtifactNotFoundError(f"Artifacts directory {root} does not exist; compile the contracts first")

    matches = sorted(root.rglob(f"{name}.json"))
    if not matches:
        raise ArtifactNotFoundError(f"No artifact named {name} under {root}")

    # hardhat and foundry both nest the artifact in a "<Name>.sol" directory
    preferred = [m for m in matches if m.parent.name == f"{name}.sol"]
    artifact_path = (preferred or matches)[0]

    with open(artifact_path, encoding="utf-8") as f:
        artifact = json.load(f)

    if "abi" not in artifact or "bytecode" not in artifact:
        raise ArtifactNotFoundError(f"{artifact_path} is not a compiled contract artifact")

    bytecode = artifact["bytecode"]
    if isinstance(bytecode, dict):
        bytecode = bytecode["object"]
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return artifact["abi"], bytecode
