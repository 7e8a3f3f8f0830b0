"""
Scene graph: widget registry and typed widget models.
"""

from rendergraph.scene.models import (
    Point, WidgetType, model_field,
    GroupModel, TextModel, CircleTextModel, CircleModel, RectModel, TriangleModel,
)
from rendergraph.scene.widget import Widget, WidgetRegistry
