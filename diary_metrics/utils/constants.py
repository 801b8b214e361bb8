"""
Constants used throughout the sleep diary metrics engine.
This includes the measure tables, severity thresholds, display symbols and
other fixed lookup values that the display layer depends on.
"""

# Diary entry measure -> summary field, in display order
measure_fields = {
    'tst': 'avg_tst',
    'tib': 'avg_tib',
    'se': 'avg_se',
    'sol': 'avg_sol',
    'waso': 'avg_waso',
    'ema': 'avg_ema',
    'twt': 'avg_twt',
    'quality_rating': 'avg_quality',
}

# Human readable labels for the clinical measures
measure_labels = {
    'tst': 'Total Sleep Time',
    'tib': 'Time In Bed',
    'se': 'Sleep Efficiency',
    'sol': 'Sleep Onset Latency',
    'waso': 'Wake After Sleep Onset',
    'ema': 'Early Morning Awakening',
    'twt': 'Total Wake Time',
    'quality_rating': 'Sleep Quality',
}

# Clinical direction of each measure: True when a higher value is better
higher_is_better = {
    'tst': True,
    'tib': True,
    'se': True,
    'sol': False,
    'waso': False,
    'ema': False,
    'twt': False,
    'quality_rating': True,
}

# Placeholder shown when a value was not recorded
placeholder = '--'

# Sleep efficiency severity bands, checked top to bottom (lower bound inclusive)
efficiency_thresholds = [
    (90, 'excellent'),
    (85, 'good'),
    (80, 'fair'),
]

efficiency_color_classes = {
    'excellent': 'text-green-600',
    'good': 'text-emerald-600',
    'fair': 'text-amber-600',
    'poor': 'text-red-600',
    'neutral': 'text-slate-500',
}

efficiency_badge_classes = {
    'excellent': 'bg-green-100 text-green-700',
    'good': 'bg-emerald-100 text-emerald-700',
    'fair': 'bg-amber-100 text-amber-700',
    'poor': 'bg-red-100 text-red-700',
    'neutral': 'bg-slate-100 text-slate-600',
}

trend_color_classes = {
    'favorable': 'text-green-600',
    'flat': 'text-slate-500',
    'unfavorable': 'text-red-600',
}

# Quality rating (1-5) display symbols
quality_symbols = {
    1: '😫',
    2: '😴',
    3: '😐',
    4: '😊',
    5: '🌟',
}
unknown_quality_symbol = '—'

# Default values for windows and titration
default_values = {
    'total_days': 7,  # Days in a summary window
    'baseline_days': 7,  # Entries used for the baseline window
    'min_window_minutes': 300,  # Sleep window floor (5 hours)
    'default_window_minutes': 360,  # Used when no prescription is known
    'titration_increment': 15,  # Minutes added or removed per adjustment
    'min_days_for_recommendation': 3,
    'min_days_for_confidence': 5,
}

# Sleep efficiency thresholds for titration decisions
titration_thresholds = {
    'excellent': 90,  # Increase window
    'good': 85,  # Maintain window
    'borderline': 80,  # Clinical judgment
}

titration_action_labels = {
    'increase': 'Increase Window',
    'maintain': 'Maintain',
    'decrease': 'Decrease Window',
    'review': 'Review Needed',
}

titration_action_badges = {
    'increase': 'bg-green-100 text-green-700',
    'maintain': 'bg-blue-100 text-blue-700',
    'decrease': 'bg-amber-100 text-amber-700',
    'review': 'bg-purple-100 text-purple-700',
}
