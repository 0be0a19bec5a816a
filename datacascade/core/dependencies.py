from typing import Optional

from datacascade.data.config import get_config
from datacascade.data.template_data import TemplateData

_template_data: Optional[TemplateData] = None


def get_template_data() -> TemplateData:
    global _template_data
    if _template_data is None:
        _template_data = TemplateData(config=get_config())
    return _template_data


def reset_template_data() -> None:
    global _template_data
    _template_data = None
