import numpy as np
import pytest

from particle_sim.core.forces import Force, Spring
from particle_sim.core.integrators import ForwardEulerIntegrator, RungeKuttaIntegrator
from particle_sim.particle import Particle
from particle_sim.profiler import Profiler
from particle_sim.system import ParticleSystem


def test_clear_forces_twice_leaves_zero():
    system = ParticleSystem()
    a = system.make_particle(position=(0, 0, 0))
    b = system.make_particle(position=(5, 0, 0))
    system.make_spring(a, b, strength=1.0, rest_length=1.0)
    system.apply_forces()
    assert not a.force.is_zero()

    system.clear_forces()
    system.clear_forces()
    assert all(p.force.is_zero() for p in system.get_particles())


def test_apply_forces_without_forces_leaves_zero():
    system = ParticleSystem()
    for i in range(3):
        system.make_particle(position=(i, 0, 0), velocity=(1, 1, 1))
    system.clear_forces()
    system.apply_forces()
    assert all(p.force.is_zero() for p in system.get_particles())


def test_particle_ids_are_unique_and_never_reused():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle()
    system.remove_particle(b)
    c = system.make_particle()
    assert (a.id, b.id, c.id) == (1, 2, 3)


def test_get_particles_is_live():
    system = ParticleSystem()
    view = system.get_particles()
    p = system.make_particle()
    assert view == [p]
    system.remove_particle(p)
    assert view == []


def test_constructor_adopts_particles():
    p = Particle(position=(1, 0, 0))
    system = ParticleSystem(particles=[p])
    assert system.contains(p)
    assert p.id == 1
    assert system.num_particles() == 1


def test_removing_spring_endpoint_disables_spring():
    system = ParticleSystem(integrator="euler")
    a = system.make_particle(position=(0, 0, 0))
    b = system.make_particle(position=(12, 0, 0))
    spring = system.make_spring(a, b, strength=1.0, rest_length=10.0)

    system.remove_particle(b)
    assert not b.alive
    assert spring.is_on()  # takes effect on the next application

    system.tick(0.1)

    assert spring.is_off()
    assert spring in system.forces
    assert a.force.is_zero()
    assert a.position == (0.0, 0.0, 0.0)


def test_remove_particle_by_index():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle()
    assert system.remove_particle(0) is a
    assert system.get_particles() == [b]
    assert system.get_particle(0) is b


def test_remove_unknown_particle_rejected():
    system = ParticleSystem()
    stranger = Particle()
    with pytest.raises(ValueError):
        system.remove_particle(stranger)
    p = system.make_particle()
    system.remove_particle(p)
    with pytest.raises(ValueError):
        system.remove_particle(p)


def test_add_particle_twice_rejected():
    system = ParticleSystem()
    p = system.make_particle()
    with pytest.raises(ValueError):
        system.add_particle(p)
    with pytest.raises(TypeError):
        system.add_particle(None)


def test_removed_particle_can_be_added_again():
    system = ParticleSystem()
    p = system.make_particle()
    system.remove_particle(p)
    system.add_particle(p)
    assert p.alive
    assert system.contains(p)
    assert p.id == 2


def test_make_force_preconditions():
    system = ParticleSystem()
    a = system.make_particle()
    outsider = Particle()
    with pytest.raises(TypeError):
        system.make_spring(a, None, strength=1.0)
    with pytest.raises(ValueError):
        system.make_spring(a, outsider, strength=1.0)
    with pytest.raises(ValueError):
        system.make_attraction(outsider, a, strength=1.0)
    with pytest.raises(ValueError):
        system.make_drag(outsider, 1.0)
    with pytest.raises(ValueError):
        system.make_particle(mass=0.0)
    with pytest.raises(TypeError):
        system.add_force("spring")
    assert system.num_forces() == 0
    assert system.num_particles() == 1


def test_attraction_to_point_needs_no_second_particle():
    system = ParticleSystem()
    a = system.make_particle(position=(0, 0, 0))
    att = system.make_attraction(a, (0, 2, 0), strength=4.0)
    system.apply_forces()
    assert np.allclose(np.asarray(a.force), [0.0, 1.0, 0.0])
    assert system.get_force(0) is att


def test_remove_force():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle(position=(3, 0, 0))
    s1 = system.make_spring(a, b, strength=1.0)
    s2 = system.make_drag(a, 0.5)
    assert system.remove_force(s1) is s1
    assert system.remove_force(0) is s2
    assert system.num_forces() == 0
    with pytest.raises(ValueError):
        system.remove_force(s1)


def test_gravity_scales_with_mass_and_skips_fixed():
    system = ParticleSystem(gravity=(0, -10, 0))
    heavy = system.make_particle(mass=2.0)
    pinned = system.make_particle(fixed=True)
    system.apply_forces()
    assert heavy.force == (0.0, -20.0, 0.0)
    assert pinned.force.is_zero()

    system.set_gravity(1, 0)
    system.clear_forces()
    system.apply_forces()
    assert heavy.force == (2.0, 0.0, 0.0)
    assert system.get_gravity() == (1.0, 0.0, 0.0)


def test_global_drag():
    system = ParticleSystem(drag=0.5)
    p = system.make_particle(velocity=(4, 0, -2))
    system.apply_forces()
    assert p.force == (-2.0, 0.0, 1.0)
    system.set_drag(0.0)
    system.clear_forces()
    system.apply_forces()
    assert p.force.is_zero()


class _Recorder(Force):
    def __init__(self, p, log, name):
        super().__init__()
        self.p, self.log, self.name = p, log, name

    @property
    def particles(self):
        return (self.p,)

    def _apply(self):
        self.log.append(self.name)


def test_forces_applied_in_insertion_order_skipping_disabled():
    system = ParticleSystem()
    p = system.make_particle()
    log = []
    for name in "abc":
        system.add_force(_Recorder(p, log, name))
    system.get_force(1).turn_off()
    system.apply_forces()
    assert log == ["a", "c"]


def test_tick_uses_configured_integrator_and_advances_time():
    system = ParticleSystem(integrator="euler")
    assert isinstance(system.get_integrator(), ForwardEulerIntegrator)
    p = system.make_particle(velocity=(1, 0, 0))
    system.tick(0.5)
    system.tick(0.5)
    assert system.time == pytest.approx(1.0)
    assert p.position == (1.0, 0.0, 0.0)

    system.set_integrator("rk4")
    assert isinstance(system.get_integrator(), RungeKuttaIntegrator)
    with pytest.raises(ValueError):
        system.set_integrator("implicit")
    assert system.integrator == "rk4"


def test_unknown_integrator_rejected_at_construction():
    with pytest.raises(ValueError):
        ParticleSystem(integrator="verlet2")


def test_clear():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle()
    system.make_spring(a, b, strength=1.0)
    system.clear()
    assert system.num_particles() == 0
    assert system.num_forces() == 0
    assert not a.alive and not b.alive


def test_profiler_records_sections():
    prof = Profiler()
    system = ParticleSystem(integrator="rk4", profiler=prof)
    a = system.make_particle()
    b = system.make_particle(position=(2, 0, 0))
    system.make_spring(a, b, strength=1.0)
    system.tick(0.1)
    system.tick(0.1)

    summary = prof.stats.summary()
    assert summary["step"]["n"] == 2
    assert summary["apply_forces"]["n"] == 8
    assert summary["clear_forces"]["n"] == 8
    assert summary["step"]["max_ms"] >= summary["step"]["mean_ms"]
    prof.reset()
    assert prof.stats.summary() == {}


def test_spring_accessors():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle(position=(0, 3, 4))
    s = system.make_spring(a, b, strength=1.0, damping=0.1, rest_length=2.0)
    assert isinstance(s, Spring)
    assert s.get_one_end() is a and s.get_the_other_end() is b
    assert s.current_length() == pytest.approx(5.0)
    s.set_strength(3.0)
    s.set_damping(0.0)
    s.set_rest_length(5.0)
    system.apply_forces()
    assert a.force.is_zero()


def test_add_force_rejects_particles_from_outside():
    system = ParticleSystem(integrator="euler")
    anchor = system.make_particle(position=(0, 0, 0), fixed=True)
    outsider = Particle(position=(5, 0, 0))
    with pytest.raises(ValueError):
        system.add_force(Spring(anchor, outsider, strength=1.0, rest_length=0.0))
    assert system.num_forces() == 0

    for _ in range(3):
        system.tick(0.1)
    assert outsider.force.is_zero()
    assert outsider.position == (5.0, 0.0, 0.0)


def test_add_force_rejects_removed_endpoint():
    system = ParticleSystem()
    a = system.make_particle()
    b = system.make_particle(position=(1, 0, 0))
    system.remove_particle(b)
    with pytest.raises(ValueError):
        system.add_force(Spring(a, b, strength=1.0))


def test_particle_cannot_join_two_systems():
    first = ParticleSystem()
    second = ParticleSystem()
    p = first.make_particle()
    with pytest.raises(ValueError):
        second.add_particle(p)
    assert first.contains(p)
    assert not second.contains(p)
    assert p.id == 1

    first.remove_particle(p)
    second.add_particle(p)
    assert second.contains(p)
    assert not first.contains(p)


def test_set_gravity_accepts_numpy_scalars():
    system = ParticleSystem()
    system.set_gravity(np.int64(1), np.float32(-2))
    assert system.get_gravity() == (1.0, -2.0, 0.0)
