import os
import re
from typing import Any, Dict

import yaml

from issueplan.utils.logging import get_logger

# Pattern to match ${VAR} or ${env:VAR}
# Captures the variable name in group 1
ENV_PATTERN = re.compile(r"\$\{(?:env:)?([A-Za-z0-9_]+)\}")


def load_yaml_with_env(path: str) -> Dict[str, Any]:
    """Load a YAML (or JSON) file with environment variable substitution.

    Supports ``${VAR_NAME}`` and ``${env:VAR_NAME}`` placeholders anywhere in
    the file text. JSON documents are valid YAML and load the same way.

    Args:
        path: Path to YAML or JSON file

    Returns:
        Parsed top-level mapping (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If environment variable is missing
        yaml.YAMLError: If YAML parsing fails
    """
    logger = get_logger()
    logger.debug("Loading YAML document", path=path)

    if not os.path.exists(path):
        logger.error("Document not found", path=path)
        raise FileNotFoundError(f"YAML file not found: {path}")

    abs_path = os.path.abspath(path)
    with open(abs_path, "r", encoding="utf-8") as f:
        content = f.read()

    env_vars_found = []

    def replace_env(match):
        var_name = match.group(1)
        env_vars_found.append(var_name)
        value = os.environ.get(var_name)
        if value is None:
            logger.error(
                "Missing required environment variable",
                variable=var_name,
                file=abs_path,
            )
            raise ValueError(f"Missing environment variable: {var_name}")
        return value

    substituted_content = ENV_PATTERN.sub(replace_env, content)

    if env_vars_found:
        logger.debug(
            "Environment variable substitution complete",
            variables_substituted=env_vars_found,
            count=len(env_vars_found),
        )

    try:
        data = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", path=abs_path, error=str(e))
        raise

    if data is None:
        data = {}

    if isinstance(data, dict):
        logger.debug("YAML parsed successfully", top_level_keys=list(data.keys()))

    return data
