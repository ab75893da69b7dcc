"""
Microbenchmark: time per tick vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from particle_sim import ParticleSystem
from particle_sim.profiler import Profiler

def run(n: int, integrator: str, steps: int = 100):
    prof = Profiler()
    system = ParticleSystem(integrator=integrator, drag=0.1, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # a ring of particles joined by springs, each attracted to the centre
    particles = [system.make_particle(position=rng.uniform(-50, 50, size=3)) for _ in range(n)]
    for i in range(n):
        system.make_spring(particles[i], particles[(i + 1) % n], strength=0.2, damping=0.05, rest_length=5.0)
        system.make_attraction(particles[i], (0.0, 0.0, 0.0), strength=10.0)

    # warmup
    for _ in range(10):
        system.tick(0.1)

    t0 = time.perf_counter()
    for _ in range(steps):
        system.tick(0.1)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for integrator in ["euler", "rk4"]:
        for n in [10, 100, 500]:
            per_step, summary = run(n, integrator)
            print(f"{integrator:6s} N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["clear_forces", "apply_forces"]:
                if k in summary:
                    print(" ", k, summary[k])
        print()
