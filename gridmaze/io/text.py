from gridmaze.core.grid import CellType, Grid, char_to_type, type_to_char


class MazeTextCodec:
    """
    Text encoding of a grid, strings only (no file I/O).
    Format:
    - header line "rows,cols"
    - one line per row, one character per cell:
      '#' wall, ' ' path, 'S' start, 'E' end, 'X' obstacle
    """

    @staticmethod
    def dumps(grid: Grid) -> str:
        lines = [f"{grid.rows},{grid.cols}"]
        for row in grid.cells:
            lines.append("".join(type_to_char(cell.type) for cell in row))
        return "\n".join(lines) + "\n"

    @staticmethod
    def loads(data: str) -> Grid:
        # Accepts \n and \r\n line endings
        lines = data.splitlines()
        if not lines or not lines[0].strip():
            raise ValueError("Missing 'rows,cols' header")

        try:
            rows, cols = (int(part) for part in lines[0].split(","))
        except ValueError:
            raise ValueError(f"Invalid header {lines[0]!r}, expected 'rows,cols'") from None

        body = lines[1:rows + 1]
        if len(body) < rows:
            raise ValueError(f"Expected {rows} rows, got {len(body)}")

        grid = Grid(rows, cols)
        for r, line in enumerate(body):
            # Trailing spaces (open cells) are easily stripped by editors
            line = line.ljust(cols)
            if len(line) != cols:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {cols}")

            for c, ch in enumerate(line):
                cell_type = char_to_type(ch)
                if cell_type == CellType.START:
                    if grid.start is not None:
                        raise ValueError(f"Second start cell at ({r}, {c})")
                    grid.set_start((r, c))
                elif cell_type == CellType.END:
                    if grid.end is not None:
                        raise ValueError(f"Second end cell at ({r}, {c})")
                    grid.set_end((r, c))
                else:
                    grid.set_type((r, c), cell_type)

        # Loading is not an obstacle change anyone has seen yet
        grid.revision = 0
        return grid


dumps = MazeTextCodec.dumps
loads = MazeTextCodec.loads
