"""Read stack outputs recorded after a deployment.

The deploy pipeline flattens the stack outputs into a single JSON object
(output name -> value) under ``cfn-outputs/flat-outputs.json``.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Union

from lib.stacks.network_stack import OUTPUTS

logger = logging.getLogger(__name__)

DEFAULT_FLAT_OUTPUTS_PATH = Path("cfn-outputs") / "flat-outputs.json"


def load_flat_outputs(path: Union[str, Path] = DEFAULT_FLAT_OUTPUTS_PATH) -> Dict[str, str]:
    """Load the flat outputs file.

    Raises:
        FileNotFoundError: No deployment has written outputs to ``path``.
        ValueError: The file is not a JSON object of string values.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            outputs = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(outputs, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(outputs).__name__}")

    bad_keys = sorted(key for key, value in outputs.items() if not isinstance(value, str))
    if bad_keys:
        raise ValueError(f"{path} has non-string values for {', '.join(bad_keys)}")

    logger.info("Loaded %d deployment outputs from %s", len(outputs), path)
    return outputs


def missing_output_keys(outputs: Mapping[str, str]) -> List[str]:
    return [key for key in OUTPUTS if key not in outputs]
