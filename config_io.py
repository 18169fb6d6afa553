import json
import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger('swequations.' + __name__)

DEFAULT_CFG = {
    'comments': {},
    'locked': False,
    'log_level': 'INFO',
    'last_opened': None,
}
CFG_VERSION = 1


def cfg_path_for(txt_path: Path) -> Path:
    return Path(txt_path).with_suffix('.cfg')


def default_cfg():
    return json.loads(json.dumps(DEFAULT_CFG)) | {'version': CFG_VERSION}


def load_cfg(path: Path):
    if not path.exists():
        return default_cfg()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            cfg = json.load(f)
    except (OSError, ValueError):
        logger.warning('Ignoring unreadable config %s', path)
        return default_cfg()
    if not isinstance(cfg, dict):
        logger.warning('Ignoring malformed config %s', path)
        return default_cfg()
    cfg.setdefault('version', CFG_VERSION)
    cfg.setdefault('comments', {})
    cfg.setdefault('locked', False)
    cfg.setdefault('log_level', 'INFO')
    cfg.setdefault('last_opened', None)
    return cfg


def save_cfg(path: Path, cfg: dict):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, indent=2)


def reconcile_cfg_with_names(cfg: dict, eq_names: set):
    # Drop comments for variables no longer in the file
    comments = cfg.setdefault('comments', {})
    for n in list(comments):
        if n not in eq_names:
            del comments[n]
    cfg['last_opened'] = datetime.now().isoformat()
    return cfg
