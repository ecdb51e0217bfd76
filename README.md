# noisegraph

Wire noise generator nodes into a graph and sample it at single points or
across position arrays. The package also keeps the state of a texture preview
(size, panning offset, frequency, seed, sampling mode), reads and writes the
preview's settings block, writes 8-bit greyscale BMP files, and tracks a
free-fly camera.

## Install

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Generators

Every node is a `noisegraph.generator.Generator`. A subclass implements
`gen(seed, *args)`, which returns the value at a position of 2, 3 or 4
coordinates. The base class then provides:

- `gen_single_2d(x, y, seed)`, `gen_single_3d(x, y, z, seed)`,
  `gen_single_4d(x, y, z, w, seed)`: the seed wraps to a signed 32-bit value.
- `gen_position_array(positions, offsets, seed)`: a list of values, one for
  each position shifted by `offsets`. A `ValueError` is raised when a
  position's length does not match the offsets, or the offsets do not have
  2 to 4 coordinates.

An input to a node is either a generator or a `HybridSource`, which holds a
constant and an optional generator. `HybridSource.set(value)` takes either
one: a number clears any generator. `source_value(source, seed, *args)`
evaluates a generator, a hybrid source or a plain number. It raises
`ValueError` for an input that is not set.

## Fractal nodes

`noisegraph.fractal` sums octaves of a source generator:

- `FractalFBm`: weighted sum of octaves.
- `FractalRidged`: sum of `1 - 2|noise|` octaves.
- `FractalPingPong`: octaves folded by `ping_pong(t)`, with a
  `set_ping_pong_strength` input.

They share `set_source`, `set_gain`, `set_weighted_strength`,
`set_octave_count` and `set_lacunarity`. Gain and weighted strength take a
constant or a generator. Each octave multiplies the position by the
lacunarity and adds one to the seed.

```python
from noisegraph.generator import Generator
from noisegraph.fractal import FractalFBm


class Ramp(Generator):
    def gen(self, seed, *args):
        return max(-1.0, min(1.0, args[0] * 0.1))


fbm = FractalFBm()
fbm.set_source(Ramp())
fbm.set_octave_count(4)
fbm.set_gain(0.5)
value = fbm.gen_single_2d(3.0, 2.0, seed=1337)
```

## Domain warp fractals

`noisegraph.warp_fractal.DomainWarp` is an abstract node. It has a warp
source, a warp amplitude and a warp frequency. A subclass implements
`warp(seed, amplitude, noise_pos, warp_pos)`, which returns
`(strength, displaced_position)`. Its `gen` warps the position once and then
samples the warp source there.

Two fractal nodes take a `DomainWarp` as their source:

- `DomainWarpFractalProgressive`: each octave samples its warp noise at the
  position the octave before it has already warped.
- `DomainWarpFractalIndependant`: each octave samples its warp noise at the
  original position.

## Metadata

`Generator.metadata()` returns a `Metadata` for the class, built once per
class. It has a name, groups and three member lists:

- `member_variables` (`MemberVariable`): float, int or enum settings. Their
  `apply(node, value)` clamps the value to the variable's bounds.
- `member_node_lookups` (`MemberNodeLookup`): inputs that must be
  generators. Their `apply(node, source)` checks the source type.
- `member_hybrids` (`MemberHybrid`): inputs that take a constant or a
  generator, set with `apply_value` or `apply_node`.

Each `apply` returns `False` when the node or the value does not fit.

```python
meta = FractalFBm.metadata()
[v.name for v in meta.member_variables]   # ['Octaves', 'Lacunarity']
node = meta.create_node()
meta.member_variables[0].apply(node, 40)  # octaves clamped to 16
```

## Base64

`noisegraph.base64codec.encode(data)` and `decode(text)` convert between
bytes and padded standard Base64 text. `decode` raises `ValueError` when the
length is not a multiple of four or the text holds characters outside the
Base64 alphabet.

## Texture preview

`noisegraph.preview.TexturePreview` holds a `BuildData`: generator, size,
offset, frequency, seed, iteration and generation type.

- `regenerate(generator)` renders the whole grid and returns a
  `TextureData` with the raw values, their minimum and maximum, and packed
  greyscale RGBA pixels. With no generator it returns a blank 16×16 texture.
  It returns `None` while no size has been set.
- `resize(width, height)` changes the size and keeps the view centred.
- `drag(dx, dy, button)`: with `"left"` it pans x/y, except in tiled mode.
  With `"right"` it moves the z slice in 3D, and the z and w slices in 4D.
- `export_build_data()` scales the offset and frequency to `export_size`, so
  that an export shows the same view.

The generation types are in `noisegraph.settings.GenType`: `TWO_D`,
`TWO_D_TILED`, `THREE_D` and `FOUR_D`.

`TextureSettings` holds `frequency`, `seed`, `gen_type` and `export_size`.
Its `to_ini()` writes the `[NoiseToolNoiseTexture][Settings]` block, and
`apply_line(line)` reads one `key=value` line back. `parse_settings(text)`
reads that block from a whole INI text.

## BMP export

`noisegraph.bmp.encode_bmp(pixels, width, height)` builds a palettised 8-bit
BMP from the low byte of each pixel, with rows padded to four bytes.
`write_bmp(path, pixels, width, height)` writes it to a file.
`next_export_path(directory, node_name)` picks the first free name among
`NAME.bmp`, `NAME_1.bmp`, `NAME_2.bmp` and so on.

```python
from noisegraph.preview import TexturePreview
from noisegraph.bmp import next_export_path, write_bmp

preview = TexturePreview()
preview.regenerate(fbm)               # None: no size yet
texture = preview.resize(64, 64)
path = next_export_path(".", "FractalFBm")
write_bmp(path, texture.pixels, *texture.size)
```

## Camera

`noisegraph.camera.CameraController` tracks the held keys (`Key`) through
`handle_key(key, pressed)`:

- W/S or Up/Down move forward and back.
- A/D or Left/Right move left and right.
- Q/E or Page Down/Page Up move down and up.
- Shift makes the movement four times faster.

`velocity(frame_duration)` returns the world-space movement for one frame.
`mouse_look(dx, dy)` turns the camera and clamps the pitch to ±89°.
`forward()` returns the direction the camera faces.

## What the package does not do

- It has no ready-made noise sources, such as gradient, cellular or white
  noise, and no concrete `DomainWarp`. You supply the leaf generators as
  `Generator` subclasses.
- It has no arithmetic or blend nodes.
- It has no numbered registry of node types. It cannot read or write whole
  node trees as encoded strings; it only provides the Base64 step.
- It has no window, drawing or GPU code. The preview and camera classes keep
  state and compute values but display nothing, and there is no command to
  run.
- Rendering happens inside `TexturePreview` calls. `export_build_data()`
  describes an export but does not render it.