import argparse
import logging
import math
import os
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Deque, Iterator, List, Optional, Sequence, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pygame
from PIL import Image
from numba import njit


logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Point3:
    """
    3D point in object space.

    Note:
      - z is depth; it must be strictly positive once translated,
        otherwise the perspective divide is meaningless.
      - Immutable: every transform returns a new Point3.
    """
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class NDCPoint:
    """Projected point in normalized device space, nominally [-1..1] on both axes."""
    x: float
    y: float


@dataclass(frozen=True)
class ScreenPoint:
    """Point in pixel space (y grows downward)."""
    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


# ============================================================
#  3D transforms
# ============================================================

def rotate_xz(p: Point3, angle: float) -> Point3:
    """
    Rotate p inside the X-Z plane (around the Y axis) by angle (radians).

    Applies the 2D rotation matrix to (x, z):
      x' = x*cos(a) - z*sin(a)
      z' = x*sin(a) + z*cos(a)
    y passes through untouched.
    """
    c, s = math.cos(angle), math.sin(angle)
    return Point3(p.x * c - p.z * s, p.y, p.x * s + p.z * c)

def translate_z(p: Point3, delta: float) -> Point3:
    """Move p along the Z axis by delta."""
    return Point3(p.x, p.y, p.z + delta)


# ============================================================
#  Projection
# ============================================================

def project(p: Point3) -> NDCPoint:
    """
    Perspective divide onto the z=1 plane: (x/z, y/z).

    The eye sits at the origin looking down +Z. Raises ZeroDivisionError
    for z == 0; magnitudes explode as z approaches 0.
    """
    return NDCPoint(p.x / p.z, p.y / p.z)

def to_screen(p: NDCPoint, width: float, height: float) -> ScreenPoint:
    """
    Convert NDC coordinates [-1..1] to pixel coordinates [0..W], [0..H].

    NDC:
      x=-1 left, x=+1 right
      y=-1 bottom, y=+1 top

    Screen:
      x=0 left, x=W right
      y=0 top, y=H bottom

    Values outside [-1..1] are not clamped.
    """
    sx = width / 2 + p.x * width / 2
    sy = (1.0 - (p.y + 1.0) / 2) * height
    return ScreenPoint(sx, sy)

def transform_vertex(v: Point3, angle: float, dz: float,
                     width: float, height: float) -> ScreenPoint:
    """The full per-vertex pipeline: rotate -> translate -> project -> screen."""
    return to_screen(project(translate_z(rotate_xz(v, angle), dz)), width, height)


# ============================================================
#  Scene
# ============================================================

@dataclass(frozen=True)
class Mesh:
    """
    Wireframe mesh: vertex list + faces.

    A face is a closed polyline of vertex indices (2 or more). Consecutive
    indices, wrapping from last to first, are the drawn edges. A 2-index
    face therefore yields the same segment twice.

    Faces are never filled, so they need not be planar or convex.
    """
    vertices: Tuple[Point3, ...]
    faces: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "faces", tuple(tuple(f) for f in self.faces))
        n = len(self.vertices)
        for fi, face in enumerate(self.faces):
            if len(face) < 2:
                raise ValueError(f"face {fi} has {len(face)} indices, need at least 2")
            for idx in face:
                if not 0 <= idx < n:
                    raise ValueError(
                        f"face {fi} references vertex {idx} but mesh has {n} vertices")

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield (a, b) vertex index pairs in face order."""
        for face in self.faces:
            for i in range(len(face)):
                yield face[i], face[(i + 1) % len(face)]


CUBE = Mesh(
    vertices=(
        Point3(-0.25,  0.25,  0.25),
        Point3( 0.25,  0.25,  0.25),
        Point3( 0.25, -0.25,  0.25),
        Point3(-0.25, -0.25,  0.25),

        Point3(-0.25,  0.25, -0.25),
        Point3( 0.25,  0.25, -0.25),
        Point3( 0.25, -0.25, -0.25),
        Point3(-0.25, -0.25, -0.25),
    ),
    faces=(
        (0, 1, 2, 3),
        (4, 5, 6, 7),
        (0, 4),
        (1, 5),
        (2, 6),
        (3, 7),
    ),
)

# Letter "B": front outline at z=0.1, back outline at z=-0.05, joined by struts.
LETTER_B = Mesh(
    vertices=(
        Point3(-0.125,  0.25, 0.1),
        Point3( 0.125,  0.25, 0.1),
        Point3( 0.125,  0.09, 0.1),
        Point3( 0.0,    0.0,  0.1),
        Point3( 0.125, -0.09, 0.1),
        Point3( 0.125, -0.25, 0.1),
        Point3(-0.125, -0.25, 0.1),

        Point3(-0.125,  0.25, -0.05),
        Point3( 0.125,  0.25, -0.05),
        Point3( 0.125,  0.09, -0.05),
        Point3( 0.0,    0.0,  -0.05),
        Point3( 0.125, -0.09, -0.05),
        Point3( 0.125, -0.25, -0.05),
        Point3(-0.125, -0.25, -0.05),
    ),
    faces=(
        (0, 1, 2, 3, 4, 5, 6),
        (7, 8, 9, 10, 11, 12, 13),
        (0, 7),
        (1, 8),
        (2, 9),
        (3, 10),
        (4, 11),
        (5, 12),
        (6, 13),
    ),
)

SCENES = {
    "b": LETTER_B,
    "cube": CUBE,
}


# ============================================================
#  Colors
# ============================================================

def parse_color(value) -> RGB:
    """
    Parse a CSS-style color descriptor ("#50FF50", "0x101010", "white", ...)
    into an (r, g, b) tuple. Raises ValueError when pygame cannot read it.
    """
    try:
        c = pygame.Color(value)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid color {value!r}") from exc
    return (c.r, c.g, c.b)


# ============================================================
#  Clipping + raster kernels (Numba)
# ============================================================

@njit(cache=True)
def clip_segment(x0, y0, x1, y1, xmax, ymax):
    """
    Liang-Barsky clip of segment (x0,y0)-(x1,y1) against [0..xmax] x [0..ymax].

    Returns (visible, cx0, cy0, cx1, cy1). Endpoints far outside the
    surface are pulled onto its border, so rasterization cost stays
    bounded by the surface size.
    """
    dx = x1 - x0
    dy = y1 - y0
    # opposite-sign endpoints near the float limit overflow the span
    if not (math.isfinite(dx) and math.isfinite(dy)):
        return False, 0.0, 0.0, 0.0, 0.0
    t0 = 0.0
    t1 = 1.0
    p = (-dx, dx, -dy, dy)
    q = (x0, xmax - x0, y0, ymax - y0)
    for i in range(4):
        if p[i] == 0.0:
            # parallel to this edge and outside of it
            if q[i] < 0.0:
                return False, 0.0, 0.0, 0.0, 0.0
        else:
            r = q[i] / p[i]
            if p[i] < 0.0:
                if r > t1:
                    return False, 0.0, 0.0, 0.0, 0.0
                if r > t0:
                    t0 = r
            else:
                if r < t0:
                    return False, 0.0, 0.0, 0.0, 0.0
                if r < t1:
                    t1 = r
    cx0, cy0 = x0 + t0 * dx, y0 + t0 * dy
    cx1, cy1 = x0 + t1 * dx, y0 + t1 * dy
    if not (math.isfinite(cx0) and math.isfinite(cy0)
            and math.isfinite(cx1) and math.isfinite(cy1)):
        return False, 0.0, 0.0, 0.0, 0.0
    return True, cx0, cy0, cx1, cy1


@njit(cache=True)
def _raster_line(img, x0, y0, x1, y1, r, g, b):
    """
    Bresenham integer line drawing straight into an (W,H,3) framebuffer.

    img index order is [x,y,color], same as pygame surfarray.
    """
    W, H, _ = img.shape

    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error2 = 0
    y = y0
    ystep = 1 if y1 > y0 else -1

    for x in range(x0, x1 + 1):
        if steep:
            px, py = y, x
        else:
            px, py = x, y
        if 0 <= px < W and 0 <= py < H:
            img[px, py, 0] = r
            img[px, py, 1] = g
            img[px, py, 2] = b
        error2 += 2 * dy
        if error2 > dx:
            y += ystep
            error2 -= 2 * dx


@njit(cache=True)
def _raster_rect(img, x0, y0, x1, y1, r, g, b):
    """Fill the half-open pixel box [x0..x1) x [y0..y1)."""
    for x in range(x0, x1):
        for y in range(y0, y1):
            img[x, y, 0] = r
            img[x, y, 1] = g
            img[x, y, 2] = b


def clamp_rect(x: float, y: float, w: float, h: float,
               width: int, height: int) -> Optional[Tuple[int, int, int, int]]:
    """
    Snap a float rectangle to whole pixels and clamp it to the surface.

    Returns the half-open box (x0, y0, x1, y1), or None when nothing of it
    lands on the surface.
    """
    x0 = max(0, min(width, math.floor(x)))
    y0 = max(0, min(height, math.floor(y)))
    x1 = max(0, min(width, math.floor(x + w)))
    y1 = max(0, min(height, math.floor(y + h)))
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


# ============================================================
#  Drawing surfaces
# ============================================================

class RasterSurface:
    """
    Off-screen framebuffer backed by a numpy array.

    Used for headless rendering and tests: no display, no SDL window.

    pixels:
      - shape (W,H,3), dtype=uint8
      - index order is [x,y,color], like pygame.surfarray.pixels3d
    """
    def __init__(self, width: int, height: int):
        self.pixels = np.zeros((width, height, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.pixels.shape[0]

    @property
    def height(self) -> int:
        return self.pixels.shape[1]

    def __repr__(self):
        return f"RasterSurface({self.width}x{self.height})"

    def clear(self, color: RGB):
        self.pixels[:, :, :] = color

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB):
        box = clamp_rect(x, y, w, h, self.width, self.height)
        if box is None:
            return
        _raster_rect(self.pixels, *box, *color)

    def stroke_line(self, p1: ScreenPoint, p2: ScreenPoint, color: RGB):
        visible, x0, y0, x1, y1 = clip_segment(
            float(p1.x), float(p1.y), float(p2.x), float(p2.y),
            float(self.width - 1), float(self.height - 1))
        if not visible:
            return
        _raster_line(self.pixels,
                     int(round(x0)), int(round(y0)),
                     int(round(x1)), int(round(y1)),
                     *color)

    def snapshot(self) -> np.ndarray:
        return self.pixels.copy()


class WindowSurface:
    """
    Drawing surface backed by the pygame display window.

    Rectangles and lines are clipped before they reach pygame, so
    coordinates far outside the window (tiny z after projection) never
    overflow SDL's integer coordinates.
    """
    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @classmethod
    def open(cls, width: int, height: int, title: str = "wireframe") -> "WindowSurface":
        """Create the display window. pygame must be initialized."""
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        return cls(screen)

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def __repr__(self):
        return f"WindowSurface({self.width}x{self.height})"

    def clear(self, color: RGB):
        self.surface.fill(color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB):
        box = clamp_rect(x, y, w, h, self.width, self.height)
        if box is None:
            return
        x0, y0, x1, y1 = box
        self.surface.fill(color, pygame.Rect(x0, y0, x1 - x0, y1 - y0))

    def stroke_line(self, p1: ScreenPoint, p2: ScreenPoint, color: RGB):
        visible, x0, y0, x1, y1 = clip_segment(
            float(p1.x), float(p1.y), float(p2.x), float(p2.y),
            float(self.width - 1), float(self.height - 1))
        if not visible:
            return
        pygame.draw.line(self.surface, color,
                         (int(round(x0)), int(round(y0))),
                         (int(round(x1)), int(round(y1))))

    def snapshot(self) -> np.ndarray:
        return pygame.surfarray.array3d(self.surface)

    def present(self):
        pygame.display.flip()


def save_frame(surface, path) -> Path:
    """Write the current surface contents to an image file (format from suffix)."""
    path = Path(path)
    # surfarray order is [x,y]; PIL wants [row,col]
    img = Image.fromarray(np.ascontiguousarray(surface.snapshot().transpose(1, 0, 2)), "RGB")
    img.save(path)
    return path


# ============================================================
#  Draw primitives
# ============================================================

@dataclass
class Painter:
    """
    Point/line/clear primitives in pixel space, delegating to a drawing surface.

    Non-finite coordinates (projection too close to z=0) are dropped
    instead of being handed to the surface.
    """
    surface: object
    background: RGB
    foreground: RGB
    point_size: float = 10.0

    def clear(self):
        """Erase the whole surface with the background color."""
        self.surface.clear(self.background)

    def point(self, p: ScreenPoint):
        """Square marker of side point_size centered at p."""
        if not p.is_finite():
            logger.debug("skipping non-finite point %s", p)
            return
        s = self.point_size
        self.surface.fill_rect(p.x - s / 2, p.y - s / 2, s, s, self.foreground)

    def line(self, p1: ScreenPoint, p2: ScreenPoint):
        if not (p1.is_finite() and p2.is_finite()):
            logger.debug("skipping non-finite line %s -> %s", p1, p2)
            return
        self.surface.stroke_line(p1, p2, self.foreground)


# ============================================================
#  Scheduling
# ============================================================

def _no_wait(delay_ms: int):
    return 0


class FrameScheduler:
    """
    Cooperative timer queue: schedule_once(callback, delay_ms) + run().

    run() pops the oldest pending timer, waits its delay, then runs the
    callback to completion before looking at the queue again. A callback
    that reschedules itself forms the render loop; the loop ends when the
    queue drains or stop() is called.

    The wait is a fixed delay from the end of one callback to the start of
    the next: late timers are never caught up.
    """
    def __init__(self, wait: Optional[Callable[[int], object]] = None):
        self._wait = wait if wait is not None else pygame.time.wait
        self._pending: Deque[Tuple[Callable[[], None], float]] = deque()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule_once(self, callback: Callable[[], None], delay_ms: float):
        self._pending.append((callback, delay_ms))

    def stop(self):
        self._running = False

    def run(self):
        self._running = True
        while self._running and self._pending:
            callback, delay_ms = self._pending.popleft()
            self._wait(max(0, int(round(delay_ms))))
            if not self._running:
                break
            callback()
        self._running = False


# ============================================================
#  Frame driver
# ============================================================

@dataclass
class RenderSession:
    """
    Animation state owned by the frame driver.

    angle grows without bound (trig handles any magnitude). dz is fixed
    unless dz_speed is non-zero.
    """
    mesh: Mesh
    fps: float = 30.0
    angle: float = 0.0
    dz: float = 1.0
    angular_speed: float = math.pi / 6
    dz_speed: float = 0.0
    frame: int = 0

    @property
    def frame_interval(self) -> float:
        """Nominal seconds per frame."""
        return 1.0 / self.fps

    def advance(self):
        """Step the animation by one nominal frame interval."""
        dt = self.frame_interval
        self.angle += self.angular_speed * dt
        self.dz += self.dz_speed * dt
        self.frame += 1


FrameHook = Callable[[RenderSession], None]


class FrameDriver:
    """
    Self-rescheduling render loop.

    Each activation:
      1. advance the session (angle, dz, frame counter)
      2. clear the surface
      3. draw a marker at every vertex
      4. draw every face edge, both endpoints recomputed from scratch
      5. run frame hooks (present, capture, ...)
      6. schedule the next activation 1000/fps ms later
    """
    def __init__(self, session: RenderSession, painter: Painter,
                 scheduler: FrameScheduler,
                 hooks: Sequence[FrameHook] = (),
                 max_frames: Optional[int] = None):
        self.session = session
        self.painter = painter
        self.scheduler = scheduler
        self.hooks: List[FrameHook] = list(hooks)
        self.max_frames = max_frames

    @property
    def frame_delay_ms(self) -> float:
        return 1000.0 / self.session.fps

    def start(self):
        """Queue the first activation; the scheduler's run() drives the rest."""
        logger.info("starting render loop at %.1f fps (%d vertices, %d faces)",
                    self.session.fps, len(self.session.mesh.vertices),
                    len(self.session.mesh.faces))
        self.scheduler.schedule_once(self.activate, self.frame_delay_ms)

    def _screen(self, v: Point3) -> ScreenPoint:
        s = self.session
        surface = self.painter.surface
        try:
            return transform_vertex(v, s.angle, s.dz, surface.width, surface.height)
        except ZeroDivisionError:
            # vertex exactly on the eye plane; Painter skips non-finite points
            return ScreenPoint(math.nan, math.nan)

    def activate(self):
        started = time.perf_counter()
        session = self.session
        session.advance()

        self.painter.clear()

        verts = session.mesh.vertices
        for v in verts:
            self.painter.point(self._screen(v))

        for a, b in session.mesh.edges():
            self.painter.line(self._screen(verts[a]), self._screen(verts[b]))

        for hook in self.hooks:
            hook(session)

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        if elapsed_ms > self.frame_delay_ms:
            logger.debug("frame %d took %.1f ms, nominal interval is %.1f ms",
                         session.frame, elapsed_ms, self.frame_delay_ms)

        if self.max_frames is not None and session.frame >= self.max_frames:
            logger.info("rendered %d frames, stopping", session.frame)
            return
        self.scheduler.schedule_once(self.activate, self.frame_delay_ms)


class WindowPresenter:
    """Frame hook: flip the display and stop the loop when the window is closed."""
    def __init__(self, surface: WindowSurface, scheduler: FrameScheduler):
        self.surface = surface
        self.scheduler = scheduler

    def __call__(self, session: RenderSession):
        self.surface.present()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("window closed after %d frames", session.frame)
                self.scheduler.stop()


class FrameCapture:
    """Frame hook: save every rendered frame as frame_00001.png, frame_00002.png, ..."""
    def __init__(self, surface, directory):
        self.surface = surface
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, frame: int) -> Path:
        return self.directory / f"frame_{frame:05d}.png"

    def __call__(self, session: RenderSession):
        path = save_frame(self.surface, self.path_for(session.frame))
        logger.debug("saved %s", path)


# ============================================================
#  Configuration
# ============================================================

@dataclass
class RenderConfig:
    """Session-wide settings; fixed once the loop starts."""
    width: int = 600
    height: int = 600
    fps: float = 30.0
    background: str = "#101010"
    foreground: str = "#50FF50"
    point_size: float = 10.0
    dz: float = 1.0
    dz_speed: float = 0.0
    angular_speed: float = math.pi / 6
    scene: str = "b"
    headless: bool = False
    max_frames: Optional[int] = None
    capture_dir: Optional[Path] = None
    wait: bool = True

    background_rgb: RGB = field(init=False, repr=False)
    foreground_rgb: RGB = field(init=False, repr=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"surface size must be positive, got {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"fps must be > 0, got {self.fps}")
        if self.point_size <= 0:
            raise ValueError(f"point_size must be > 0, got {self.point_size}")
        if self.max_frames is not None and self.max_frames < 1:
            raise ValueError(f"max_frames must be >= 1, got {self.max_frames}")
        if self.scene not in SCENES:
            raise ValueError(f"unknown scene {self.scene!r}, expected one of {sorted(SCENES)}")
        self.background_rgb = parse_color(self.background)
        self.foreground_rgb = parse_color(self.foreground)
        if self.capture_dir is not None:
            self.capture_dir = Path(self.capture_dir)

    @property
    def mesh(self) -> Mesh:
        return SCENES[self.scene]

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RenderConfig":
        return cls(
            width=args.width,
            height=args.height,
            fps=args.fps,
            background=args.background,
            foreground=args.foreground,
            point_size=args.point_size,
            dz=args.dz,
            dz_speed=args.dz_speed,
            scene=args.scene,
            headless=args.headless,
            max_frames=args.frames,
            capture_dir=args.capture_dir,
            wait=not args.no_wait,
        )


# ============================================================
#  Logging
# ============================================================

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-15s | %(lineno)4d | %(message)s"


def setup_logging(level="INFO"):
    """Set the root level, then attach a console handler (pipe-separated format) once."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if root_logger.hasHandlers():
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


# ============================================================
#  Main loop
# ============================================================

def build_session(config: RenderConfig) -> RenderSession:
    return RenderSession(
        mesh=config.mesh,
        fps=config.fps,
        dz=config.dz,
        angular_speed=config.angular_speed,
        dz_speed=config.dz_speed,
    )


def build_parser() -> argparse.ArgumentParser:
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        prog="wireframe",
        description="Spinning 3D wireframe drawn with a perspective divide",
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default=defaults.scene,
                        help=f"Mesh to draw (default: {defaults.scene})")
    parser.add_argument("--width", type=int, default=defaults.width,
                        help=f"Surface width in pixels (default: {defaults.width})")
    parser.add_argument("--height", type=int, default=defaults.height,
                        help=f"Surface height in pixels (default: {defaults.height})")
    parser.add_argument("--fps", type=float, default=defaults.fps,
                        help=f"Target frames per second (default: {defaults.fps:g})")
    parser.add_argument("--background", default=defaults.background,
                        help=f"Background color (default: {defaults.background})")
    parser.add_argument("--foreground", default=defaults.foreground,
                        help=f"Point and line color (default: {defaults.foreground})")
    parser.add_argument("--point-size", type=float, default=defaults.point_size,
                        help=f"Vertex marker side in pixels (default: {defaults.point_size:g})")
    parser.add_argument("--dz", type=float, default=defaults.dz,
                        help=f"Z offset applied before projection (default: {defaults.dz:g})")
    parser.add_argument("--dz-speed", type=float, default=defaults.dz_speed,
                        help="Z offset change per second; 0 keeps the mesh in place")
    parser.add_argument("--headless", action="store_true",
                        help="Render into an off-screen buffer instead of a window")
    parser.add_argument("--frames", type=int, default=None,
                        help="Stop after this many frames (default: run until closed)")
    parser.add_argument("--capture-dir", type=Path, default=None,
                        help="Save every frame as PNG into this directory")
    parser.add_argument("--no-wait", action="store_true",
                        help="Do not sleep between frames")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: INFO)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point:
      - parse CLI, configure logging
      - open a window (or an off-screen buffer with --headless)
      - run the frame loop until the window closes or --frames is reached
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = RenderConfig.from_args(args)
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2
    logger.info("config: %s", config)

    try:
        scheduler = FrameScheduler(wait=pygame.time.wait if config.wait else _no_wait)
        hooks: List[FrameHook] = []

        if config.headless:
            surface = RasterSurface(config.width, config.height)
        else:
            pygame.init()
            surface = WindowSurface.open(config.width, config.height,
                                         title=f"wireframe: {config.scene}")
            hooks.append(WindowPresenter(surface, scheduler))
        logger.info("drawing surface: %r", surface)

        if config.capture_dir is not None:
            hooks.append(FrameCapture(surface, config.capture_dir))
            logger.info("capturing frames into %s", config.capture_dir)

        painter = Painter(surface, config.background_rgb, config.foreground_rgb,
                          point_size=config.point_size)
        driver = FrameDriver(build_session(config), painter, scheduler,
                             hooks=hooks, max_frames=config.max_frames)
        driver.start()
        scheduler.run()
    except KeyboardInterrupt:
        logger.info("interrupted")
    except Exception:
        logger.exception("render loop failed")
        raise
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
