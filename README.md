# particlefall

A small particle-system demo. Coloured star sprites are emitted near the
origin, kept sorted back to front by depth, fall under their own velocity and
are removed once they drop below a height of -3. Each frame the live particles
are turned into textured quads, transformed by a left-handed camera and
perspective projection, and drawn by a small software rasteriser with additive
blending into a pygame window.

## Installing

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Running

```
particlefall
```

A window opens and particles start falling. Press Escape or close the window
to quit. Options:

- `--width`, `--height` – window size in pixels (default 800 by 600).
- `--texture PATH` – the 32-bit uncompressed Targa image drawn for each
  particle (default `./data/star01.tga`, relative to the working directory).
- `--fullscreen` – run full screen.
- `--no-vsync` – present frames as fast as possible instead of holding to
  60 frames per second.

If the texture cannot be read or the window cannot be opened, the command
prints the reason to standard error and exits with status 1.

## Using the pieces

The modules can be used on their own:

- `particlefall.transforms` – `identity`, `rotation_roll_pitch_yaw`,
  `transform_coord`, `look_at_lh`, `perspective_fov_lh` and
  `orthographic_lh` build and apply 4×4 row-vector matrices.
- `particlefall.camera` – `Camera` holds a position and a rotation in degrees;
  `render()` and `render_reflection(height)` compute and return the view
  matrices.
- `particlefall.timer` – `Timer` measures the time between calls to
  `frame()` after `start()`; a custom clock function can be passed in.
- `particlefall.particles` – `ParticleSystem` emits, moves and kills
  `Particle` values; `frame(frame_time)` does all three and
  `build_vertices()` returns six `Vertex` values per possible particle,
  padded with empty vertices.
- `particlefall.texture` – `parse_targa` and `load_targa` read 32-bit Targa
  images into a `TargaImage` in top-down RGBA order, raising `TargaError` on
  bad input.
- `particlefall.display` – `Display` is a window or, with `window=False`, an
  off-screen surface, with a depth buffer, `BlendMode`, and the world,
  projection and orthographic matrices.
- `particlefall.input` – `InputState` tracks pressed keys (`Key`), mouse
  buttons and a mouse cursor clamped to the screen.
- `particlefall.shader` – `project_vertices` maps vertices to screen space and
  `ParticleShader.render` draws quads into a `Display`.
- `particlefall.application` – `Application` ties it together; `main()` is the
  entry point behind the `particlefall` command.

```python
import random

from particlefall.particles import ParticleSystem

system = ParticleSystem(rng=random.Random(1))
for _ in range(100):
    system.frame(0.016)
print(system.count, len(system.build_vertices()))
```

An `Application` can also run without a window and without a texture file,
in which case each particle is drawn as a plain coloured square:

```python
from particlefall.application import Application
from particlefall.input import InputState

with Application(texture=None, window=False) as app:
    state = InputState(800, 600)
    for _ in range(10):
        app.frame(state)
```

## What it does not do

No particle texture is shipped with the package: the default command needs a
32-bit uncompressed Targa file at `./data/star01.tga` or one named with
`--texture`. Only uncompressed 32-bit Targa images are read. Drawing is done
on the CPU into a pygame surface; there is no hardware-accelerated rendering
and no shader files are compiled or loaded.