# artifacts.py
import json
from pathlib import Path
from typing import Dict, Union

import yaml

from .config import ConfigInput, serializable_config
from .constants import logger
from .models import GenerationResult


def save_page_object(result: GenerationResult, output_dir: Union[str, Path], file_name: str,
                     config: ConfigInput = None) -> Dict[str, Path]:
    """Write the page object, its elements and the configuration used."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        'page_object': output_dir / f"{file_name}.py",
        'elements': output_dir / f"{file_name}_elements.json",
        'config': output_dir / f"{file_name}_config.yaml",
    }

    paths['page_object'].write_text(result.page_object_code, encoding='utf-8')
    paths['elements'].write_text(
        json.dumps([el.to_dict() for el in result.elements], ensure_ascii=False, indent=2),
        encoding='utf-8',
    )
    paths['config'].write_text(
        yaml.dump(serializable_config(config), allow_unicode=True, default_flow_style=False),
        encoding='utf-8',
    )

    logger.info(f"Saved page object to {paths['page_object']}")
    return paths
