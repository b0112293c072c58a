# barshell

The core logic of a small status bar for Wayland compositors: reading
and watching its YAML configuration, the three-section bar layout, menu
state and placement, the icon set, and log-level specifications.

## Configuration

By default the configuration lives at `~/.config/barshell.yml`
(`config_path()` builds this path from `$HOME`, or from the directory
you pass). `read_config` returns the default configuration when the
file cannot be opened; a document that cannot be understood raises
`ConfigError`.

```python
from barshell.config import config_path, parse_config, read_config

cfg = read_config(config_path("/home/me"))
print(cfg.position, cfg.log_level, cfg.truncate_title_after_length)

cfg = parse_config("""
logLevel: info
position: Bottom
outputs: Active
modules:
  left: [Workspaces]
  center: [WindowTitle]
  right: [[Clock, Privacy, Settings]]
appearance:
  primaryColor: "#fab387"
""")
```

Keys are written in camelCase. Every section has defaults, so an empty
document is a valid configuration. `outputs` is `All`, `Active`, or a
non-empty list of output names given as `{Targets: [...]}` or with the
`!Targets` tag. In `modules`, a nested list is a group of modules.

Colours are given either as a hex string (`#RGB`, `#RGBA`, `#RRGGBB`,
`#RRGGBBAA`; alpha is ignored) or as a mapping with `base` and optional
`strong`, `weak` and `text` entries. `AppearanceColor` holds them as
`Color` values; `get_weak_pair` and `get_strong_pair` give a `Pair` of
background and text colour, falling back to the text colour you pass.

`watch_config(path, interval, settle)` polls the file every `interval`
seconds and yields a fresh `Config` each time it is created, changed or
removed. Removal yields the defaults; after a change it waits `settle`
seconds before reading; documents that fail to parse are logged and
skipped.

## Layout

`Centerbox` (in `barshell.centerbox`) lays out three children: the left
one against the left edge, the right one against the right edge, and
the middle one centred on the bar where there is room, or centred in
the space left between the other two where there is not.
`FixedChild` stands in for a child of known size, and
`Centerbox.layout(limits)` returns a `Node` tree with the position and
size of each child. `Length`, `Padding`, `Limits`, `Size`, `Point` and
`Alignment` are the supporting geometry types.

## Menus

`Menu` (in `barshell.menu`) keeps track of which menu is open on a
surface and for which button. `open`, `close`, `toggle` and `close_if`
return lists of surface commands (`SetLayer`,
`SetKeyboardInteractivity`) needed to show or hide it;
`request_keyboard` and `release_keyboard` switch keyboard focus.
`menu_left_offset` places a menu of a given `MenuSize` under its button
without letting it run off the screen, and `menu_vertical_anchor`
returns the `Alignment` that hangs the menu from the edge matching the
bar's `Position`.

## Icons

`Icons` names every glyph the bar draws; `Icons.glyph()` gives the
character, and `icon(kind)` returns the character together with the
font name `"Symbols Nerd Font"`.

## Logging

`parse_log_spec` reads a specification such as `"warn"` or
`"info, barshell.config=debug"`, with an optional `/regex` that filters
messages; unknown levels raise `LogSpecError`. `log_spec_from_env_or`
prefers a valid specification in the `BARSHELL_LOG` environment
variable, and `LogSpec.apply()` sets the levels on Python's `logging`
loggers.

## What this package does not do

It draws nothing and has no command to start: there is no bar window,
no compositor connection, and none of the bar modules themselves
(workspaces, clock, tray, system information and so on). It provides
the configuration, layout, menu and logging logic such a bar is built on.