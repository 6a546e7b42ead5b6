"""Source registry: which outlets belong to which bias category."""

from typing import Dict, Iterable, List

from ..config import SourceConfig
from ..models import BIAS_ORDER, Bias, Source


class SourceRegistry:
    """Static lookup of enabled sources per bias category."""

    def __init__(self, sources: Iterable[SourceConfig]) -> None:
        self._by_bias: Dict[Bias, List[Source]] = {bias: [] for bias in BIAS_ORDER}
        for source in sources:
            if source.enabled:
                self._by_bias[source.bias].append(source.to_source())

    def sources_for_bias(self, bias: Bias) -> List[Source]:
        """Sources of one bias, in configuration order. Empty when none are configured."""
        return list(self._by_bias.get(Bias(bias), []))

    def by_bias(self) -> Dict[Bias, List[Source]]:
        return {bias: self.sources_for_bias(bias) for bias in BIAS_ORDER}

    def __len__(self) -> int:
        return sum(len(sources) for sources in self._by_bias.values())
