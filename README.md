# lorenzview

An interactive viewer for the Lorenz attractor. A point is moved through the
system with a classic fourth-order Runge–Kutta step of size 0.01, and each new
position is plotted in the x–z plane. You can change the `sigma`, `rho` and
`beta` parameters with sliders while it runs.

The package also has two self-contained utilities:

- `lorenzview.rectpack`: a skyline rectangle packer with bottom-left and
  best-fit heuristics. It packs rectangles into a fixed-size target.
- `lorenzview.textedit`, with `lorenzview.textedit_layout` and
  `lorenzview.textedit_undo`: a text-editing engine. It handles the cursor, the
  selection, keyboard navigation (including word, line, page and text moves),
  insert mode, and a bounded undo/redo history over a fixed-width text layout.

## Installation

```
pip install .
```

The viewer window needs `pygame`.

## Running the viewer

```
lorenzview
```

This opens a 1280×720 window with a "Menu" panel. **Play** clears the canvas and
starts the trajectory again from `(0.1, 0, 0)`. **Stop** pauses it. Each slider
(Sigma, Rho, Beta) covers the range 0–40. New values take effect on the next
step. The command has no options other than `--help`.

## Using the library

Integrating the system directly:

```python
from lorenzview.lorenz import LorenzParams, LorenzSystem, to_screen

system = LorenzSystem(LorenzParams(), (0.1, 0.0, 0.0), 0.01)
for x, y, z in system.trajectory(1000):
    px, py = to_screen(x, z, 1280, 720, 10)
```

`rk4_step(params, x, y, z, h)` and `derivatives(params, x, y, z)` are also
available as plain functions.

Packing rectangles:

```python
from lorenzview.rectpack import Heuristic, Packer, PackRect

packer = Packer(256, 256, 256)
packer.setup_heuristic(Heuristic.SKYLINE_BF_SORT_HEIGHT)
rects = [PackRect(w=32, h=16, id=i) for i in range(10)]
all_packed = packer.pack_rects(rects)
# Each rect now has x, y and was_packed set.
```

Rectangles that do not fit get `was_packed = False` and the coordinates
`rectpack.MAX_VAL`.

Editing text:

```python
from lorenzview.textedit import Key, TextEditState
from lorenzview.textedit_layout import MonospaceText

text = MonospaceText("hello", 8.0, 16.0, 400.0)
state = TextEditState(False)
state.key(text, Key.TEXTEND)
state.paste(text, " world")
state.key(text, Key.LEFT | Key.SHIFT)
state.undo(text)
print(str(text), state.cursor)
```

`TextEditState.key` accepts a single character, a code point, or a `Key` value.
Combine a `Key` value with `Key.SHIFT` to extend the selection. Mouse input goes
through `click(text, x, y)` and `drag(text, x, y)`.

## What it does not do

The text-editing engine works only on `MonospaceText` objects in memory. It
draws nothing and reads no window events, and the viewer does not use it. The
viewer keeps no history of trajectories and saves nothing to disk.

## Tests

```
pip install .[test]
pytest
```