# datahandler

A toolkit for experimental measurements. Measurements are kept as named
variables (columns) that always have the same number of values; each
variable has a title and tag, an error setting (absolute or relative) and
drawing settings (visibility, width, colour, point shape, line type).

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
datahandler [FILE] [-y]
```

starts an interactive shell. `FILE`, if given, is a `.csv` or `.json` file
loaded first. `-y` / `--yes` answers yes to every confirmation question.

Shell commands (rows and columns are numbered from 1):

| command | effect |
| --- | --- |
| `show` | print the measurements table |
| `vars` | list variables with tag and error |
| `addcol` | add an unnamed variable |
| `addrow` | add a zero measurement to every variable |
| `delcol N...` | delete variables (asks first) |
| `delrow N...` | delete measurement rows (asks first) |
| `clear` | delete all data (asks first) |
| `set ROW COLUMN VALUE` | change one measurement (non-zero numbers only) |
| `title COLUMN TEXT` / `tag COLUMN TEXT` | rename; names in use are refused |
| `error COLUMN Absolute\|Relative VALUE` | set the error of a variable |
| `calc NAME FORMULA` | add or recalculate a calculated variable |
| `load PATH` / `save PATH` | read or write CSV or JSON |
| `quit` | leave (asks first if there is data) |

## Library use

```python
from datahandler.manager import Manager
from datahandler.variable import Variable, Naming
from datahandler.formula import evaluate_formula
from datahandler.calculated import add_calculated
from datahandler.storage import save, load

manager = Manager()
manager.add_variable(Variable([5, 4, 3, 2, 1], Naming("Bar")))
manager.add_variable(Variable([1, 2, 3, 4, 5], Naming("Var")))

print(evaluate_formula("Var^3 + Bar^2", manager))  # [26.0, 24.0, 36.0, 68.0, 126.0]

add_calculated(manager, "Sum", "Var + Bar")  # CalculatedOutcome.ADDED

save(manager, "experiment.csv")
load(manager, "experiment.csv")
```

### Modules

- `datahandler.variable` – `Variable`, `Naming`, `VisualOptions`,
  `ErrorOptions` and the enums `PointShape`, `LineType`, `ErrorType`.
- `datahandler.manager` – `Manager` keeps variables padded with zeros to
  equal length, refuses a second variable with a title or tag already in
  use (except "unnamed"), and calls callbacks registered with `connect`
  for `ManagerEvent`s. `find` raises `UnknownVariableError`.
  `get_instance()` returns a shared manager.
- `datahandler.formula` – `parse` builds a tree of `Number`, `Name`,
  `Signed`, `Operation` and `Program`; `evaluate` and `evaluate_formula`
  compute it element-wise. Operators are `+ - * / ^` with unary signs and
  parentheses; names are variable titles or tags. Malformed formulas raise
  `FormulaError`.
- `datahandler.calculated` – `add_calculated` adds a hidden calculated
  variable or recalculates an existing one; redefining a measured
  variable raises `ValueError`.
- `datahandler.storage` – `CsvFormat` and `JsonFormat` with `save` and
  `load`; `format_for_path` picks one by extension, and `save` / `load`
  use it. Loading replaces the manager's variables.
- `datahandler.measurements_table`, `naming_table`, `errors_table`,
  `plot_settings_table` – table models (`row_count`, `column_count`,
  `data`, `set_data`, `header_data`, `flags`) over a manager, with
  `Role`, `Orientation` and `ItemFlag`.
- Plot data: `line_series` (with error bars), `scatter_series`,
  `column_bars`, `Histogram`, `Histogram2D` (a `DensityMap`) and
  `ScatterPlot2D`; `plot_base` gives `PlotKind` and `theme_for`.
- `datahandler.database` – `MeasurementsDatabase` stores each variable as a
  one-column SQLite table named after its title. Values are stored
  truncated to whole numbers. Tables can be listed, dropped, shown as a
  grid, or loaded back into a manager as unnamed variables.
- `datahandler.report` – `Report` holds `TextBlock`, `TableBlock` and
  `PlotBlock` (PNG data) entries that can be reordered or deleted;
  `assemble` writes them to an OpenDocument text file.

## What it does not do

The package draws no plots and has no graphical window: the plot modules
only compute the data and settings a plotting library would need. Plot
images for reports must be supplied as PNG bytes. The shell covers editing,
calculation and CSV/JSON files; the SQLite archive, reports and plot data
are available from Python only.