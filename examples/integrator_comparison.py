from particle_sim import ParticleSystem
from particle_sim.core import kinetic_energy, spring_potential_energy
import numpy as np

# Undamped oscillator: x(t) = cos(t). Forward Euler drifts and gains energy.
for name in ["euler", "modified_euler", "rk4"]:
    system = ParticleSystem(integrator=name)
    anchor = system.make_particle(position=(0, 0, 0), fixed=True)
    bob = system.make_particle(position=(1, 0, 0))
    system.make_spring(anchor, bob, strength=1.0, rest_length=0.0)

    e0 = kinetic_energy(system.particles) + spring_potential_energy(system.forces)
    for _ in range(1000):
        system.tick(0.05)
    e1 = kinetic_energy(system.particles) + spring_potential_energy(system.forces)

    err = abs(bob.position.x - np.cos(system.time))
    print(f"{name:15s} x err={err:.2e}  energy ratio={e1 / e0:.6f}")
