"""
Batch Renderer

Renders a DrawBatch directly to screen with moderngl.
Creates and manages its own shaders and buffers.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    import moderngl
    from rendergraph.ui.draw import DrawBatch

logger = logging.getLogger(__name__)

# pos(2f) + color(4f)
_VERTEX_FORMAT = "2f 4f"
_VERTEX_BYTES = 6 * 4

_VERTEX_SHADER = """
#version 330
in vec2 in_pos;
in vec4 in_color;
out vec4 v_color;
uniform vec2 u_screen_size;

void main() {
    vec2 ndc = (in_pos / u_screen_size) * 2.0 - 1.0;
    ndc.y = -ndc.y;  // Flip Y for top-left origin
    gl_Position = vec4(ndc, 0.0, 1.0);
    v_color = in_color;
}
"""

_FRAGMENT_SHADER = """
#version 330
in vec4 v_color;
out vec4 frag_color;
void main() { frag_color = v_color; }
"""


class _VertexStream:
    """Growable dynamic VBO + VAO pair."""

    def __init__(self, ctx: 'moderngl.Context', prog: 'moderngl.Program'):
        self.ctx = ctx
        self.prog = prog
        self.vbo = None
        self.vao = None
        self.capacity = 0

    def ensure(self, vertex_count: int):
        if self.capacity >= vertex_count and self.vbo is not None:
            return

        new_capacity = max(vertex_count, self.capacity * 2, 256)

        if self.vao:
            self.vao.release()
        if self.vbo:
            self.vbo.release()

        self.vbo = self.ctx.buffer(reserve=new_capacity * _VERTEX_BYTES, dynamic=True)
        self.vao = self.ctx.vertex_array(
            self.prog,
            [(self.vbo, _VERTEX_FORMAT, "in_pos", "in_color")],
        )
        self.capacity = new_capacity
        logger.debug(f"Vertex stream grown to {new_capacity} vertices")

    def draw(self, vertices, mode: int):
        count = len(vertices)
        if count == 0:
            return
        self.ensure(count)
        self.vbo.write(vertices.tobytes())
        self.vao.render(mode=mode, vertices=count)

    def release(self):
        if self.vao:
            self.vao.release()
        if self.vbo:
            self.vbo.release()
        self.vao = None
        self.vbo = None
        self.capacity = 0


class BatchRenderer:
    """
    Standalone renderer for DrawBatch.

    Usage:
        renderer = BatchRenderer(ctx)

        # Each frame:
        draw_ctx.clear()
        dispatcher.render_all(view, registry)
        renderer.render(draw_ctx.finalize(), screen_width, screen_height)
    """

    def __init__(self, ctx: 'moderngl.Context'):
        self.ctx = ctx

        self._prog = None
        self._triangles: Optional[_VertexStream] = None
        self._lines: Optional[_VertexStream] = None

        self._initialized = False

    def _ensure_initialized(self):
        """Create GPU resources on first use."""
        if self._initialized:
            return

        self._prog = self.ctx.program(
            vertex_shader=_VERTEX_SHADER,
            fragment_shader=_FRAGMENT_SHADER,
        )
        self._triangles = _VertexStream(self.ctx, self._prog)
        self._lines = _VertexStream(self.ctx, self._prog)

        self._initialized = True

    def render(self, batch: 'DrawBatch', screen_width: int, screen_height: int):
        """
        Render a DrawBatch to the current framebuffer.

        Fills are drawn before strokes. Text commands are collected
        by the batch but not rasterized here.
        """
        self._ensure_initialized()

        self._prog["u_screen_size"].value = (screen_width, screen_height)

        if batch.triangles:
            self._triangles.draw(batch.triangle_vertices(), self.ctx.TRIANGLES)

        if batch.lines:
            self._lines.draw(batch.line_vertices(), self.ctx.LINES)

    def release(self):
        """Release GPU resources."""
        if self._triangles:
            self._triangles.release()
        if self._lines:
            self._lines.release()
        if self._prog:
            self._prog.release()
        self._initialized = False
