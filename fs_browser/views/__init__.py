from .scatter_view import ScatterView
from .bar_view import BarView
from .line_view import LineView
from .dumbbell_view import DumbbellView

__all__ = ["ScatterView", "BarView", "LineView", "DumbbellView"]
