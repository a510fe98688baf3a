#!/usr/bin/env python3
"""
Example usage of the conways package.
"""

from conways import Universe, PatternLibrary, Simulation, export_world


def main():
    """Demonstrate programmatic usage of the conways package."""
    # Create an empty universe and a driver for it
    universe = Universe(12, 12)
    universe.clear()
    simulation = Simulation(universe)

    # Place a glider
    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    glider.apply(universe, row=1, column=1)

    print("Initial state:")
    print(universe)
    print(f"Population: {simulation.population}")
    print()

    # A glider crosses a 12x12 torus in 48 generations
    for _ in range(12):
        simulation.step(4)
        print(f"Generation {simulation.generation}:")
        print(universe)
        print()

    print("World text:")
    print(export_world(universe))


if __name__ == "__main__":
    main()
