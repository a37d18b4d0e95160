"""HTML 模板生成。

najie-ai-draw webui v0.1.0

单页 UI：绘画 / 历史 / 配置三个页签，数据全部来自 /api/*。
"""

from __future__ import annotations

import html

__all__ = [
    "generate_html",
    "PAGE_HTML",
]

_TEMPLATE = '''<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>__TITLE__</title>
<style>
    body { font-family: -apple-system, "Segoe UI", "PingFang SC", sans-serif; margin: 0; background: #f5f5f7; color: #222; }
    header { background: #6b46c1; color: #fff; padding: 12px 24px; display: flex; gap: 16px; align-items: center; }
    header h1 { font-size: 18px; margin: 0 24px 0 0; }
    header button { background: transparent; color: #fff; border: 0; font-size: 15px; cursor: pointer; opacity: .7; }
    header button.active { opacity: 1; font-weight: bold; }
    main { max-width: 960px; margin: 24px auto; padding: 0 16px; }
    section { display: none; background: #fff; border-radius: 12px; padding: 20px; }
    section.active { display: block; }
    label { display: block; margin: 12px 0 4px; font-size: 13px; color: #555; }
    input, select, textarea { width: 100%; box-sizing: border-box; padding: 8px; border: 1px solid #ccc; border-radius: 8px; }
    textarea { min-height: 90px; }
    .row { display: flex; gap: 12px; }
    .row > div { flex: 1; }
    .primary { margin-top: 16px; background: #6b46c1; color: #fff; border: 0; padding: 10px 20px; border-radius: 8px; cursor: pointer; }
    .primary:disabled { opacity: .5; }
    .error { color: #c53030; margin-top: 12px; white-space: pre-wrap; }
    .ok { color: #2f855a; margin-top: 12px; }
    #result img { max-width: 100%; margin-top: 16px; border-radius: 8px; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr)); gap: 12px; margin-top: 12px; }
    .card { border: 1px solid #eee; border-radius: 8px; overflow: hidden; font-size: 12px; }
    .card img { width: 100%; aspect-ratio: 1; object-fit: cover; background: #eee; }
    .card div { padding: 6px 8px; }
    .card button { float: right; border: 0; background: none; color: #c53030; cursor: pointer; }
</style>
</head>
<body>
<header>
    <h1>__TITLE__</h1>
    <button data-tab="draw" class="active">绘画</button>
    <button data-tab="history">历史</button>
    <button data-tab="config">配置</button>
</header>
<main>
<section id="draw" class="active">
    <label>提示词</label>
    <textarea id="prompt" placeholder="描述你想生成的图片"></textarea>
    <div class="row">
        <div><label>模型</label><select id="model"></select></div>
        <div id="style-box"><label>风格</label><select id="style"></select></div>
    </div>
    <div class="row" id="free-resolution">
        <div><label>宽高比</label><select id="aspect"></select></div>
        <div><label>边长</label><select id="size"></select></div>
    </div>
    <div id="fixed-resolution"><label>分辨率</label><select id="resolution"></select></div>
    <label>标签（逗号分隔）</label>
    <input id="tags">
    <button class="primary" id="generate">生成</button>
    <div id="draw-error" class="error"></div>
    <div id="result"></div>
</section>
<section id="history">
    <label>按标签过滤</label>
    <select id="tag-filter"><option value="">全部</option></select>
    <div class="grid" id="history-grid"></div>
</section>
<section id="config">
    <label>提供商</label><select id="cfg-provider"></select>
    <label>SecretId</label><input id="cfg-secret-id">
    <label>SecretKey</label><input id="cfg-secret-key" type="password">
    <label>地域</label><input id="cfg-region" value="ap-guangzhou">
    <button class="primary" id="cfg-save">保存</button>
    <button class="primary" id="cfg-test">测试</button>
    <div id="cfg-msg"></div>
</section>
</main>
<script>
(function() {
    const $ = (id) => document.getElementById(id);
    let catalog = { models: [], aspectRatios: [], sizes: [] };

    async function api(path, options) {
        const res = await fetch('/api' + path, Object.assign({ headers: { 'Content-Type': 'application/json' } }, options || {}));
        return res.json();
    }

    function fillSelect(select, items) {
        select.innerHTML = '';
        items.forEach(([value, label]) => {
            const opt = document.createElement('option');
            opt.value = value;
            opt.textContent = label;
            select.appendChild(opt);
        });
    }

    function currentModel() {
        return catalog.models.find(m => m.id === $('model').value) || catalog.models[0];
    }

    function onModelChange() {
        const model = currentModel();
        if (!model) return;
        $('style-box').style.display = model.hasStyle ? '' : 'none';
        fillSelect($('style'), [['', '默认']].concat(model.styles.map(s => [s.value, s.label])));
        $('fixed-resolution').style.display = model.hasFixedResolution ? '' : 'none';
        $('free-resolution').style.display = model.hasFixedResolution ? 'none' : '';
        fillSelect($('resolution'), model.fixedResolutions.map(r => [r, r.replace(':', '×')]));
        $('resolution').value = model.fixedResolutions.includes('1024:1024') ? '1024:1024' : (model.fixedResolutions[0] || '');
    }

    function calculateResolution() {
        const model = currentModel();
        if (model.hasFixedResolution) return $('resolution').value;
        const [w, h] = $('aspect').value.split(':').map(Number);
        const base = parseInt($('size').value, 10);
        return w >= h ? `${base}:${Math.round(base * h / w)}` : `${Math.round(base * w / h)}:${base}`;
    }

    async function generate() {
        const prompt = $('prompt').value.trim();
        if (!prompt) return;
        $('generate').disabled = true;
        $('draw-error').textContent = '';
        $('result').innerHTML = '生成中...';
        try {
            const data = await api('/generate', { method: 'POST', body: JSON.stringify({
                prompt, model: $('model').value, resolution: calculateResolution(),
                style: currentModel().hasStyle ? $('style').value : '', tags: $('tags').value
            }) });
            $('result').innerHTML = '';
            if (!data.success) { $('draw-error').textContent = data.error; return; }
            const img = document.createElement('img');
            img.src = data.imageUrl || ('data:image/png;base64,' + data.imageBase64);
            $('result').appendChild(img);
        } catch (err) {
            $('result').innerHTML = '';
            $('draw-error').textContent = String(err);
        } finally {
            $('generate').disabled = false;
        }
    }

    async function loadHistory() {
        const tag = $('tag-filter').value;
        const data = await api('/history' + (tag ? '?tag=' + encodeURIComponent(tag) : ''));
        const grid = $('history-grid');
        grid.innerHTML = '';
        const tags = new Set();
        (data.records || []).forEach(record => {
            (record.tags || '').split(',').map(t => t.trim()).filter(Boolean).forEach(t => tags.add(t));
            const card = document.createElement('div');
            card.className = 'card';
            const img = document.createElement('img');
            img.src = record.thumbnail_url || '';
            const info = document.createElement('div');
            info.textContent = `${record.model} · ${record.resolution} · ${record.prompt}`;
            const del = document.createElement('button');
            del.textContent = '删除';
            del.onclick = async () => { await api('/history/' + record.id, { method: 'DELETE' }); loadHistory(); };
            info.appendChild(del);
            card.appendChild(img);
            card.appendChild(info);
            grid.appendChild(card);
        });
        if (!tag) {
            fillSelect($('tag-filter'), [['', '全部']].concat(Array.from(tags).sort().map(t => [t, t])));
        }
    }

    async function loadConfig() {
        const [cfg, providers] = await Promise.all([api('/config'), api('/providers')]);
        fillSelect($('cfg-provider'), (providers.providers || []).map(p => [p.id, p.name]));
        if (cfg.success) {
            $('cfg-provider').value = cfg.config.provider;
            $('cfg-secret-id').value = cfg.config.secretId || '';
            $('cfg-secret-key').value = cfg.config.secretKey || '';
            $('cfg-region').value = cfg.config.region || 'ap-guangzhou';
        }
    }

    function configBody() {
        return JSON.stringify({
            provider: $('cfg-provider').value, secretId: $('cfg-secret-id').value,
            secretKey: $('cfg-secret-key').value, region: $('cfg-region').value
        });
    }

    function showConfigResult(data, okText) {
        $('cfg-msg').className = data.success ? 'ok' : 'error';
        $('cfg-msg').textContent = data.success ? okText : data.error;
    }

    document.querySelectorAll('header button').forEach(btn => {
        btn.onclick = () => {
            document.querySelectorAll('header button').forEach(b => b.classList.toggle('active', b === btn));
            document.querySelectorAll('section').forEach(s => s.classList.toggle('active', s.id === btn.dataset.tab));
            if (btn.dataset.tab === 'history') loadHistory();
            if (btn.dataset.tab === 'config') loadConfig();
        };
    });

    $('model').onchange = onModelChange;
    $('generate').onclick = generate;
    $('tag-filter').onchange = loadHistory;
    $('cfg-save').onclick = async () => showConfigResult(await api('/config', { method: 'POST', body: configBody() }), '已保存');
    $('cfg-test').onclick = async () => showConfigResult(await api('/config/test', { method: 'POST', body: configBody() }), '连接正常');

    api('/models').then(data => {
        catalog = data;
        fillSelect($('model'), data.models.map(m => [m.id, `${m.name}（${m.description}）`]));
        fillSelect($('aspect'), data.aspectRatios.map(r => [r, r]));
        fillSelect($('size'), data.sizes.map(s => [String(s), String(s)]));
        $('size').value = '1024';
        onModelChange();
    });
})();
</script>
</body>
</html>'''


def generate_html(*, title: str = "AI 画画") -> str:
    """生成 HTML 页面。

    Args:
        title: 页面标题

    Returns:
        完整的 HTML 字符串
    """
    return _TEMPLATE.replace("__TITLE__", html.escape(title))


PAGE_HTML = generate_html()
