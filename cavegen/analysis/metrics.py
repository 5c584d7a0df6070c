
import numpy as np, pandas as pd
from scipy import ndimage

from ..ca.grid import as_grid, occupied_fraction

def grid_metrics(grid):
    g = as_grid(grid)
    if g.size == 0:
        return {'occupied_fraction': 0.0, 'open_regions': 0, 'largest_open_fraction': 0.0}
    labels, n = ndimage.label(g == 0)  # 4-connected floor regions
    largest = int(np.bincount(labels.ravel())[1:].max()) if n else 0
    return {'occupied_fraction': occupied_fraction(g), 'open_regions': int(n),
            'largest_open_fraction': largest / g.size}

def metrics_from_log(log):
    df = pd.DataFrame(log)
    if df.empty:
        return {'final_occupied': 0.0, 'mean_occupied': 0.0, 'rooms': 0, 'iterations': 0}, df
    summary = {'final_occupied': float(df['occupied'].iloc[-1]),
               'mean_occupied': float(df['occupied'].mean()),
               'rooms': int(df['rooms'].iloc[-1]),
               'iterations': int(len(df))}
    return summary, df
