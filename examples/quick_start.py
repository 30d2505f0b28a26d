"""Quick start example: interpolate sampled profiles and combine them."""

from pypiecewise import PiecewiseFunction

# Electric field (V/m) sampled on a coarse grid (m)
field = PiecewiseFunction({
    "0": "1.2e5",
    "1e-7": "8.0e4",
    "5e-7": "0",
    "1e-6": "-2.0e4",
})

# Carrier density (m^-3) sampled on a different, finer grid
density = PiecewiseFunction({
    "0": "1e21",
    "2.5e-7": "4e21",
    "5e-7": "1e22",
    "7.5e-7": "3e22",
    "1e-6": "5e22",
})

# Evaluate between samples
position = "3e-7"
print(f"Field at {position} m:   {field.value_at(position)} V/m")
print(f"Density at {position} m: {density.value_at(position)} m^-3")

# Density is interpolated onto the grid of the field
product = field * density
print("\nfield * density:")
print(product)

# The field crosses zero: remove exact zeros before dividing by it
ratio = density / field.avoid_zeros()
print("density / field:")
print(ratio)
