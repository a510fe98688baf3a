"""Tkinter GUI frontend for Conway's Game of Life."""

import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Optional
import os
import numpy as np

from ..core.universe import DEFAULT_SIZE, Universe
from ..core.simulation import Simulation
from ..core.patterns import PatternLibrary
from ..core.world import load_world
from .cli import greet

GRID_COLOR = "#333333"
DEAD_COLOR = "#000000"
ALIVE_COLOR = "#20C20E"


class TkinterGameOfLifeGUI:
    """Tkinter-based GUI for Conway's Game of Life."""

    def __init__(self, master: tk.Tk, universe: Optional[Universe] = None) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            universe: Universe to show (defaults to a new 64x64 universe)
        """
        self.master = master
        self.master.title("Conway's Game of Life")
        self.master.configure(bg="#333333")

        self.cell_size = 10
        self.universe = universe if universe is not None else Universe()
        self.simulation = Simulation(self.universe)
        self.pattern_library = PatternLibrary()

        # GUI state
        self.running = False
        self.ticks_per_frame = 1
        self.update_interval = 16
        self._after_id: Optional[str] = None

        self.setup_ui()
        self.resize_canvas()
        self.redraw_all_cells()

    @property
    def rows(self) -> int:
        return self.universe.height

    @property
    def cols(self) -> int:
        return self.universe.width

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)
        self._create_control_buttons(control_frame)

        main_frame = tk.Frame(self.master, bg="#333333")
        main_frame.pack(fill=tk.BOTH, expand=True)

        self.canvas = tk.Canvas(main_frame, bg=DEAD_COLOR, highlightthickness=0)
        self.canvas.pack(side=tk.LEFT, padx=5)
        self.canvas.bind("<Button-1>", self.on_click)

        self._create_control_panel(main_frame)

    def _button(self, parent: tk.Frame, text: str, command) -> tk.Button:
        button = tk.Button(parent, text=text, command=command, bg="#555555", fg="white", font=("Arial", 9))
        button.pack(side=tk.LEFT, padx=3)
        return button

    def _create_control_buttons(self, parent: tk.Frame) -> None:
        """Create the main control buttons."""
        self.play_btn = self._button(parent, "Play", self.toggle_running)
        self._button(parent, "Step", self.step_once)
        self._button(parent, "Clear", self.clear)
        self._button(parent, "Random", self.randomize)
        self._button(parent, "Import World", self.import_world)
        self._button(parent, "Hello", self.say_hello)

    def _create_control_panel(self, parent: tk.Frame) -> None:
        """Create the sliders and statistics labels."""
        controls_frame = tk.Frame(parent, bg="#333333")
        controls_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=10, pady=5)

        tk.Label(controls_frame, text="Size:", bg="#333333", fg="white", font=("Arial", 9)).pack(anchor="w")
        self.size_slider = tk.Scale(
            controls_frame,
            from_=8,
            to=256,
            orient=tk.HORIZONTAL,
            bg="#555555",
            fg="white",
            length=180,
        )
        self.size_slider.set(self.universe.width)
        self.size_slider.bind("<ButtonRelease-1>", lambda event: self.set_size(self.size_slider.get()))
        self.size_slider.pack(pady=(0, 10))

        tk.Label(controls_frame, text="Ticks per Frame:", bg="#333333", fg="white", font=("Arial", 9)).pack(anchor="w")
        self.speed_slider = tk.Scale(
            controls_frame,
            from_=1,
            to=20,
            orient=tk.HORIZONTAL,
            bg="#555555",
            fg="white",
            length=180,
            command=self.set_speed,
        )
        self.speed_slider.set(self.ticks_per_frame)
        self.speed_slider.pack(pady=(0, 20))

        tk.Label(
            controls_frame,
            text="Click: toggle\nShift-click: glider\nCtrl-click: pulsar",
            bg="#333333",
            fg="#AAAAAA",
            font=("Arial", 8),
            justify=tk.LEFT,
        ).pack(anchor="w", pady=(0, 20))

        self.generation_label = tk.Label(controls_frame, text="Generation: 0", bg="#333333", fg="white", font=("Arial", 9))
        self.generation_label.pack(anchor="w")
        self.population_label = tk.Label(controls_frame, text="Population: 0", bg="#333333", fg="white", font=("Arial", 9))
        self.population_label.pack(anchor="w")
        self.fps_label = tk.Label(
            controls_frame, text="", bg="#333333", fg="#00FF00", font=("Courier", 9), justify=tk.LEFT
        )
        self.fps_label.pack(anchor="w", pady=(10, 0))

    def resize_canvas(self) -> None:
        """Fit the canvas to the universe, one pixel of grid line per cell."""
        self.canvas_width = (self.cell_size + 1) * self.cols + 1
        self.canvas_height = (self.cell_size + 1) * self.rows + 1
        self.canvas.config(width=self.canvas_width, height=self.canvas_height)
        self.canvas.delete("all")
        self.draw_grid()

    def draw_grid(self) -> None:
        """Draw grid lines."""
        step = self.cell_size + 1
        for i in range(self.cols + 1):
            self.canvas.create_line(i * step, 0, i * step, self.canvas_height, fill=GRID_COLOR, tags="grid")
        for j in range(self.rows + 1):
            self.canvas.create_line(0, j * step, self.canvas_width, j * step, fill=GRID_COLOR, tags="grid")

    def alive_cells(self) -> np.ndarray:
        """Decode the packed cell buffer into a (rows, cols) boolean array."""
        bits = np.unpackbits(self.universe.cell_buffer(), count=self.rows * self.cols, bitorder="little")
        return bits.astype(bool).reshape(self.rows, self.cols)

    def redraw_all_cells(self) -> None:
        """Redraw every living cell from the committed cell buffer."""
        self.canvas.delete("cell")
        step = self.cell_size + 1
        for row, col in zip(*np.nonzero(self.alive_cells())):
            x1 = int(col) * step + 1
            y1 = int(row) * step + 1
            self.canvas.create_rectangle(
                x1, y1, x1 + self.cell_size, y1 + self.cell_size, fill=ALIVE_COLOR, outline="", tags="cell"
            )
        self.update_statistics()

    def update_statistics(self) -> None:
        """Update generation, population and FPS labels."""
        self.generation_label.config(text=f"Generation: {self.simulation.generation}")
        self.population_label.config(text=f"Population: {self.simulation.population}")
        fps = self.simulation.frames.summary()
        self.fps_label.config(
            text=(
                "Frames per Second:\n"
                f"         latest = {fps['latest']:.0f}\n"
                f"avg of last 100 = {fps['mean']:.0f}\n"
                f"min of last 100 = {fps['min']:.0f}\n"
                f"max of last 100 = {fps['max']:.0f}"
            )
        )

    def set_speed(self, value: str) -> None:
        """Set ticks per frame from the slider."""
        self.ticks_per_frame = max(1, int(float(value)))

    def set_size(self, size: int) -> None:
        """Resize the universe to ``size`` x ``size``, clearing it."""
        self.pause()
        self.universe.set_width(size)
        self.universe.set_height(size)
        self.simulation.reset_generation()
        self.resize_canvas()
        self.redraw_all_cells()

    def toggle_running(self) -> None:
        """Toggle the simulation running state."""
        if self.running:
            self.pause()
        else:
            self.play()

    def play(self) -> None:
        self.running = True
        self.play_btn.config(text="Pause")
        self.update_loop()

    def pause(self) -> None:
        self.running = False
        self.play_btn.config(text="Play")
        if self._after_id is not None:
            self.master.after_cancel(self._after_id)
            self._after_id = None

    def step_once(self) -> None:
        """Advance a single generation."""
        self.simulation.step()
        self.redraw_all_cells()

    def clear(self) -> None:
        """Kill every cell and restart the generation counter."""
        self.pause()
        self.universe.clear()
        self.simulation.reset_generation()
        self.redraw_all_cells()

    def randomize(self) -> None:
        """Fill the universe at random and restart the generation counter."""
        self.universe.randomize()
        self.simulation.reset_generation()
        self.redraw_all_cells()

    def on_click(self, event: tk.Event) -> None:
        """Toggle a cell, or stamp a glider (Shift) or pulsar (Control)."""
        if event.state & 0x0001:
            self.stamp_pattern_at_position("Glider", event.x, event.y)
        elif event.state & 0x0004:
            self.stamp_pattern_at_position("Pulsar", event.x, event.y)
        else:
            self.toggle_cell_at_position(event.x, event.y)

    def position_to_cell(self, canvas_x: int, canvas_y: int) -> Optional[tuple]:
        """Convert canvas coordinates to (row, col), or None outside the grid."""
        step = self.cell_size + 1
        row = canvas_y // step
        col = canvas_x // step
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return (row, col)
        return None

    def toggle_cell_at_position(self, canvas_x: int, canvas_y: int) -> None:
        """Toggle the cell under canvas coordinates."""
        cell = self.position_to_cell(canvas_x, canvas_y)
        if cell is not None:
            self.universe.toggle_cell(*cell)
            self.redraw_all_cells()

    def stamp_pattern_at_position(self, name: str, canvas_x: int, canvas_y: int) -> None:
        """Stamp a library pattern centred on the cell under canvas coordinates."""
        cell = self.position_to_cell(canvas_x, canvas_y)
        pattern = self.pattern_library.get_pattern(name)
        if cell is None or pattern is None:
            return
        rows, cols = pattern.get_size()
        pattern.apply(self.universe, cell[0] - rows // 2, cell[1] - cols // 2)
        self.redraw_all_cells()

    def import_world(self, filename: Optional[str] = None) -> None:
        """Load a world text file chosen by the user."""
        if filename is None:
            filename = filedialog.askopenfilename(
                title="Import World", filetypes=[("World files", "*.txt"), ("All files", "*.*")]
            )
        if not filename:
            return

        self.pause()
        try:
            load_world(self.universe, filename)
        except (ValueError, OSError) as e:
            messagebox.showerror("Error", f"Failed to import world: {e}")
            return

        self.simulation.reset_generation()
        self.size_slider.set(self.universe.width)
        self.resize_canvas()
        self.redraw_all_cells()
        self.master.title(f"Conway's Game of Life - {os.path.basename(filename)}")

    def say_hello(self) -> None:
        messagebox.showinfo("Hello", greet("Life"))

    def update_loop(self) -> None:
        """Advance one frame and schedule the next while running."""
        if not self.running:
            return
        self.simulation.frame(self.ticks_per_frame)
        self.redraw_all_cells()
        self._after_id = self.master.after(self.update_interval, self.update_loop)


def main() -> None:
    """Main entry point for the Tkinter GUI."""
    root = tk.Tk()
    root.resizable(False, False)
    TkinterGameOfLifeGUI(root, Universe(DEFAULT_SIZE, DEFAULT_SIZE))
    root.mainloop()


if __name__ == "__main__":
    main()
