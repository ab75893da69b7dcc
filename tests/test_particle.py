import math

import pytest

from particle_sim.particle import Particle
from particle_sim.vector import Vector3D


def test_defaults():
    p = Particle()
    assert p.mass == 1.0
    assert p.is_free()
    assert p.position.is_zero()
    assert p.velocity.is_zero()
    assert p.force.is_zero()
    assert p.age == 0.0
    assert not p.alive
    assert p.id == -1


@pytest.mark.parametrize("mass", [0.0, -1.0, math.nan, math.inf])
def test_invalid_mass_rejected(mass):
    with pytest.raises(ValueError):
        Particle(mass=mass)
    p = Particle()
    with pytest.raises(ValueError):
        p.set_mass(mass)
    assert p.mass == 1.0


def test_particles_never_share_vectors():
    shared = Vector3D(1, 2, 3)
    a = Particle(position=shared, velocity=shared)
    b = Particle(position=shared)
    a.position.add((1, 0, 0))
    a.velocity.add((0, 1, 0))
    assert b.position == (1.0, 2.0, 3.0)
    assert shared == (1.0, 2.0, 3.0)
    assert a.position is not a.velocity
    assert a.force is not b.force


def test_apply_force_accumulates_without_scaling():
    p = Particle(mass=4.0)
    p.apply_force((1, 0, 0))
    p.apply_force(Vector3D(0, 2, 0))
    assert p.force == (1.0, 2.0, 0.0)
    p.clear_force()
    assert p.force.is_zero()


def test_make_fixed_stops_motion():
    p = Particle(velocity=(3, 0, 0))
    p.make_fixed()
    assert p.is_fixed() and not p.is_free()
    assert p.velocity.is_zero()
    p.make_free()
    assert p.is_free()


def test_reset():
    p = Particle(mass=3.0, position=(1, 1, 1), velocity=(2, 2, 2), fixed=True, age=5.0)
    p.apply_force((1, 1, 1))
    p.reset()
    assert p.mass == 1.0
    assert p.is_free()
    assert p.age == 0.0
    assert p.position.is_zero() and p.velocity.is_zero() and p.force.is_zero()


def test_particles_compare_by_identity():
    assert Particle() != Particle()
