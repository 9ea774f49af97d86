from collections.abc import Sequence

import yaml
from pydantic import BaseModel


def dump_model_as_yaml(model: BaseModel | Sequence[BaseModel], /) -> str:
    if isinstance(model, BaseModel):
        return yaml.safe_dump(model.model_dump(mode="json"), sort_keys=False, indent=1, width=400)

    return "\n".join([yaml.safe_dump(item.model_dump(mode="json"), sort_keys=False, indent=1, width=400) for item in model])
